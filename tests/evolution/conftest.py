import pytest

from toy_individuals import Scalar


@pytest.fixture
def scalars():
    return [Scalar(v, name=f"s{i}") for i, v in enumerate([5, 9, 3, 9, 1])]
