"""Shared pytest fixtures for thermoapprox tests."""
import matplotlib
matplotlib.use("Agg")

import pytest

from thermoapprox.core.row import OffsetRow
from thermoapprox.core.table import OffsetTable


@pytest.fixture
def absolute_text():
    """Two measurement segments in absolute coordinates, out of temperature order."""
    return "\r\n".join([
        "temp;x;y",
        "nan;nan;nan",
        "0;10;5",
        "4;14;3",
        "2;12;4",
        "nan;nan;nan",
        "1;100;50",
        "3;98;51",
    ])


@pytest.fixture
def linear_table():
    """Differential table whose X offset is 2*temp and Y offset is constant -1."""
    return OffsetTable([OffsetRow(0, 0, -1), OffsetRow(1, 2, -1), OffsetRow(2, 4, -1)])


@pytest.fixture
def measurement_file(tmp_path, absolute_text):
    path = tmp_path / "measurements.csv"
    path.write_text(absolute_text, encoding="utf-8")
    return path


@pytest.fixture
def linear_measurement_file(tmp_path):
    path = tmp_path / "linear.csv"
    path.write_text("temp;dx;dy\n0;0;-1\n1;2;-1\n2;4;-1\n", encoding="utf-8")
    return path
