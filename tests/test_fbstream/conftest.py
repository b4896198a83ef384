import pytest
from fbstream import SegmentPool


@pytest.fixture()
def pool() -> SegmentPool:
    """Малые сегменты, чтобы чтения пересекали границы сегментов."""

    return SegmentPool(segment_size=16, max_free=4)
