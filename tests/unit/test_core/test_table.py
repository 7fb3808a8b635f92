"""Unit tests for offset tables: parsing, rebasing, resampling and formatting."""

import pandas as pd
import pytest

from thermoapprox.core.exceptions import (EmptyInputError, MalformedRowError, TooFewRowsError,
                                          UnrecognizedHeaderError)
from thermoapprox.core.row import OffsetRow, SegmentBreak
from thermoapprox.core.table import OffsetTable, rebase, resample_grid

GRID = list(range(-50, 71, 6))


class TestParse:
    """Test OffsetTable.parse header dispatch and canonical ordering."""

    def test_absolute_single_row(self):
        table = OffsetTable.parse("temp;x;y\r\n12;34;56")
        assert table.rows == (OffsetRow(12, 34, 56),)
        assert table.differential

    def test_differential_single_row(self):
        table = OffsetTable.parse("temp;dx;dy\r\n12;34;56")
        assert table.rows == (OffsetRow(12, 34, 56),)

    def test_absolute_with_anchor(self):
        table = OffsetTable.parse("temp;x;y\r\nnan;nan;nan\r\n12;34;56")
        assert table.rows == (OffsetRow(12, 0, 0),)

    def test_rebase_example(self):
        table = OffsetTable.parse("temp;x;y\nnan;nan;nan\n0;10;5\n1;12;6")
        assert table.rows == (OffsetRow(0, 0, 0), OffsetRow(1, 2, 1))

    def test_multiple_segments(self, absolute_text):
        table = OffsetTable.parse(absolute_text)
        assert table.rows == (
            OffsetRow(0, 0, 0),
            OffsetRow(1, 0, 0),
            OffsetRow(2, 2, -1),
            OffsetRow(3, -2, 1),
            OffsetRow(4, 4, -2),
        )

    def test_rows_before_first_anchor_use_zero_baseline(self):
        table = OffsetTable.parse("temp;x;y\n5;3;4\nnan;nan;nan\n6;10;10\n7;11;9")
        assert table.rows == (OffsetRow(5, 3, 4), OffsetRow(6, 0, 0), OffsetRow(7, 1, -1))

    @pytest.mark.parametrize("separator", ["\n", "\r\n", "\r"])
    def test_any_line_separator(self, separator):
        table = OffsetTable.parse(separator.join(["temp;dx;dy", "2;1;1", "1;0;0"]))
        assert table.rows == (OffsetRow(1, 0, 0), OffsetRow(2, 1, 1))

    def test_trailing_newline(self):
        assert len(OffsetTable.parse("temp;dx;dy\r\n1;2;3\r\n")) == 1

    def test_sort_is_stable(self):
        table = OffsetTable.parse("temp;dx;dy\n-43;2;-3\n-44;2;-3\n-43;0;-2")
        assert table.rows == (OffsetRow(-44, 2, -3), OffsetRow(-43, 2, -3), OffsetRow(-43, 0, -2))

    def test_consecutive_duplicates_removed(self):
        table = OffsetTable.parse("temp;dx;dy\n1;2;3\n0;0;0\n1;2;3")
        assert table.rows == (OffsetRow(0, 0, 0), OffsetRow(1, 2, 3))

    def test_only_adjacent_duplicates_removed(self):
        table = OffsetTable.parse("temp;dx;dy\n1;2;3\n1;5;5\n1;2;3")
        assert len(table) == 3

    def test_differential_drops_anchors(self):
        table = OffsetTable.parse("temp;dx;dy\nnan;nan;nan\n1;2;3\nnan;nan;nan")
        assert table.rows == (OffsetRow(1, 2, 3),)

    def test_differential_partial_rows_kept(self):
        text = "temp;dx;dy\r\n1;2;3\r\n5;nan;3\r\n7;4;nan"
        table = OffsetTable.parse(text)
        assert table.rows == (OffsetRow(1, 2, 3), OffsetRow(5, None, 3), OffsetRow(7, 4, None))
        assert table.format() == text

    def test_differential_row_without_temperature(self):
        with pytest.raises(MalformedRowError, match="no temperature"):
            OffsetTable.parse("temp;dx;dy\n1;2;3\nnan;2;3")

    @pytest.mark.parametrize("header", ["foo;bar;baz", "temp; x; y", "temp;x", "TEMP;X;Y", "temp;dx;y"])
    def test_unrecognized_header(self, header):
        with pytest.raises(UnrecognizedHeaderError):
            OffsetTable.parse(f"{header}\n1;2;3")

    @pytest.mark.parametrize("text", ["", "temp;x;y", "temp;dx;dy\r\n"])
    def test_too_few_rows(self, text):
        with pytest.raises(TooFewRowsError):
            OffsetTable.parse(text)

    def test_wrong_field_count(self):
        with pytest.raises(MalformedRowError, match="Invalid row length"):
            OffsetTable.parse("temp;x;y\n1;2;3\n4;5")

    def test_anchor_as_last_row(self):
        with pytest.raises(MalformedRowError, match="last row"):
            OffsetTable.parse("temp;x;y\n1;2;3\nnan;nan;nan")

    def test_anchor_followed_by_anchor(self):
        with pytest.raises(MalformedRowError, match="followed by"):
            OffsetTable.parse("temp;x;y\nnan;nan;nan\nnan;nan;nan\n1;2;3")

    def test_partial_row_in_absolute_table(self):
        with pytest.raises(MalformedRowError, match="Invalid row format"):
            OffsetTable.parse("temp;x;y\n1;2;3\n2;nan;3")


class TestRebase:
    def test_segment_break_sets_baseline(self):
        records = [SegmentBreak(), OffsetRow(0, 10, 5), OffsetRow(1, 12, 6)]
        assert rebase(records) == [OffsetRow(0, 0, 0), OffsetRow(1, 2, 1)]

    def test_keeps_file_order(self):
        records = [OffsetRow(3, 1, 1), OffsetRow(1, 2, 2)]
        assert rebase(records) == [OffsetRow(3, 1, 1), OffsetRow(1, 2, 2)]

    def test_error_reports_line_number(self):
        with pytest.raises(MalformedRowError) as excinfo:
            rebase([OffsetRow(1, 2, 3), OffsetRow(None, 2, 3)])
        assert excinfo.value.index == 3


class TestResample:
    """Test resampling onto the temperature grid."""

    def test_default_grid(self):
        assert resample_grid() == GRID
        assert len(resample_grid()) == 21

    def test_grid_validation(self):
        with pytest.raises(ValueError):
            resample_grid(0, 10, 0)
        with pytest.raises(ValueError):
            resample_grid(10, 0, 1)

    def test_resample_shape(self, linear_table):
        model = linear_table.resample()
        assert len(model) == 21
        temperatures = [row.temp for row in model]
        assert temperatures == GRID
        assert temperatures == sorted(temperatures)
        assert model.differential

    def test_resample_values(self, linear_table):
        model = linear_table.resample()
        for row in model:
            assert row.x == 2 * row.temp
            assert row.y == -1

    def test_resample_truncates_toward_zero(self):
        table = OffsetTable([OffsetRow(0, 0, 0), OffsetRow(2, 1, 0)])
        model = table.resample(grid=[-3, 3])
        assert model.rows == (OffsetRow(-3, -1, 0), OffsetRow(3, 1, 0))

    def test_resample_parsed_table(self):
        table = OffsetTable.parse("temp;x;y\nnan;nan;nan\n0;10;5\n1;12;6")
        model = table.resample()
        assert len(model) == 21
        assert model[0] == OffsetRow(-50, -100, -50)

    def test_resample_empty(self):
        with pytest.raises(EmptyInputError):
            OffsetTable().resample()

    def test_resample_absolute_table(self):
        with pytest.raises(ValueError, match="differential"):
            OffsetTable([OffsetRow(0, 0, 0)], differential=False).resample()

    def test_resample_missing_field(self):
        with pytest.raises(MalformedRowError):
            OffsetTable([OffsetRow(0, 0, 0), OffsetRow(1, None, 0)]).resample()

    def test_resample_repeated_temperature(self):
        table = OffsetTable.parse("temp;dx;dy\n-44;2;-3\n-43;0;-2\n-43;2;-3\n-42;0;-2")
        with pytest.raises(MalformedRowError, match=r"repeated temperature\(s\) \[-43\]"):
            table.resample()


class TestFormat:
    """Test text formatting."""

    def test_format_rows(self):
        assert OffsetTable([OffsetRow(12, 34, 56)]).format() == "temp;dx;dy\r\n12;34;56"
        assert str(OffsetTable([OffsetRow(None, 34, 56)])) == "temp;dx;dy\r\nnan;34;56"

    def test_format_no_trailing_separator(self):
        text = OffsetTable([OffsetRow(1, 2, 3), OffsetRow(4, 5, 6)]).format()
        assert text == "temp;dx;dy\r\n1;2;3\r\n4;5;6"

    def test_format_empty(self):
        assert OffsetTable().format() == "temp;dx;dy"

    def test_format_absolute(self):
        assert OffsetTable([OffsetRow(1, 2, 3)], differential=False).format() == "temp;x;y\r\n1;2;3"

    def test_round_trip_sorted_and_deduplicated(self):
        text = "temp;dx;dy\n3;1;1\n-2;0;-1\n3;1;1\n0;0;0"
        assert OffsetTable.parse(text).format() == "temp;dx;dy\r\n-2;0;-1\r\n0;0;0\r\n3;1;1"

    def test_round_trip_is_stable(self, absolute_text):
        table = OffsetTable.parse(absolute_text)
        assert OffsetTable.parse(table.format()) == table


class TestExports:
    def test_offset_pairs(self, linear_table):
        assert linear_table.offset_pairs('x') == [(0, 0), (1, 2), (2, 4)]
        assert linear_table.offset_pairs('y') == [(0, -1), (1, -1), (2, -1)]

    def test_offset_pairs_invalid_axis(self, linear_table):
        with pytest.raises(ValueError):
            linear_table.offset_pairs('z')

    def test_to_pandas(self):
        df = OffsetTable([OffsetRow(1, None, 3), OffsetRow(2, 4, 5)]).to_pandas()
        assert list(df.columns) == ['temp', 'dx', 'dy']
        assert str(df['dx'].dtype) == 'Int32'
        assert pd.isna(df['dx'][0])
        assert df['dy'].tolist() == [3, 5]

    def test_to_pandas_empty(self):
        df = OffsetTable().to_pandas()
        assert df.empty
        assert list(df.columns) == ['temp', 'dx', 'dy']
