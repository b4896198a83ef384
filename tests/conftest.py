import pytest
from helpers import make_data


@pytest.fixture()
def data() -> bytes:
    """0, 1, ..., 254"""

    return make_data(255)
