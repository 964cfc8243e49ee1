import matplotlib

matplotlib.use("Agg")

import pytest

from apportionment.models import Entity


@pytest.fixture
def abc_entities():
    return [Entity("A", 500, 10), Entity("B", 300, -10), Entity("C", 200, 0)]
