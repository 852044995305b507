"""
Unit tests for grid reconstruction.

Grid contract:
- the origin of a merged region is not a placeholder and carries its rowspan
- every other covered position is a placeholder
- positions covered by an earlier row's rowspan are skipped before placing a cell
- rows with unreadable span attributes are skipped
"""

import unittest

from mytimetable.grid import build_grid, grid_from_markup, locate_table, read_table_rows
from mytimetable.model import RawCell


class TestBuildGrid(unittest.TestCase):
    def test_rowspan_origin_and_placeholder(self) -> None:
        rows = [
            [RawCell("节次"), RawCell("时间"), RawCell("星期三")],
            [RawCell("1"), RawCell("08:00-09:40"), RawCell("高数", row_span=2)],
            [RawCell("2"), RawCell("10:00-11:40")],
        ]
        grid = build_grid(rows)

        self.assertEqual((grid.height, grid.width), (3, 3))

        origin = grid.cell(1, 2)
        assert origin is not None
        self.assertFalse(origin.is_placeholder)
        self.assertEqual(origin.row_span, 2)

        covered = grid.cell(2, 2)
        assert covered is not None
        self.assertTrue(covered.is_placeholder)
        self.assertEqual(covered.row_span, 0)

    def test_cell_after_vertical_span_is_shifted_right(self) -> None:
        rows = [
            [RawCell("A", row_span=2), RawCell("B")],
            [RawCell("C")],
        ]
        grid = build_grid(rows)

        self.assertEqual(grid.text(1, 0), "A")
        self.assertEqual(grid.text(1, 1), "C")
        c = grid.cell(1, 1)
        assert c is not None
        self.assertFalse(c.is_placeholder)

    def test_colspan_fills_all_positions(self) -> None:
        grid = build_grid([[RawCell("wide", row_span=2, col_span=2), RawCell("x")], [RawCell("y")]])

        self.assertEqual(grid.width, 3)
        placeholders = [grid.cell(r, c).is_placeholder for r in range(2) for c in range(2)]  # type: ignore[union-attr]
        self.assertEqual(placeholders, [False, True, True, True])
        self.assertEqual(grid.text(1, 2), "y")

    def test_flat_storage_is_row_major(self) -> None:
        grid = build_grid([[RawCell("a"), RawCell("b")], [RawCell("c"), RawCell("d")]])
        self.assertEqual([c.text for c in grid.cells], ["a", "b", "c", "d"])  # type: ignore[union-attr]

    def test_ragged_rows_leave_empty_positions(self) -> None:
        grid = build_grid([[RawCell("a"), RawCell("b"), RawCell("c")], [RawCell("d")]])
        self.assertIsNone(grid.cell(1, 2))
        self.assertIsNone(grid.cell(5, 5))
        self.assertEqual(grid.text(1, 2), "")

    def test_empty_input(self) -> None:
        grid = build_grid([])
        self.assertEqual((grid.height, grid.width), (0, 0))


class TestMarkup(unittest.TestCase):
    def test_locate_first_table(self) -> None:
        html = "<p>intro</p><table><tr><td>first</td></tr></table><table><tr><td>second</td></tr></table>"
        table = locate_table(html)
        assert table is not None
        self.assertEqual(read_table_rows(table), [[RawCell("first")]])

    def test_no_table(self) -> None:
        self.assertIsNone(locate_table("<p>no table here</p>"))
        self.assertIsNone(grid_from_markup(""))

    def test_text_is_stripped_and_normalised(self) -> None:
        html = "<table><tr><td><p>高等数学</p><p>  王老师 </p></td><td rowspan=\"3\" colspan=\"2\"><b>x</b></td></tr></table>"
        table = locate_table(html)
        assert table is not None
        rows = read_table_rows(table)
        self.assertEqual(rows, [[RawCell("高等数学 王老师"), RawCell("x", row_span=3, col_span=2)]])

    def test_malformed_row_is_skipped(self) -> None:
        html = (
            "<table>"
            "<tr><td>h</td></tr>"
            "<tr><td rowspan=\"abc\">broken</td></tr>"
            "<tr><td>ok</td></tr>"
            "</table>"
        )
        grid = grid_from_markup(html)
        assert grid is not None
        self.assertEqual(grid.height, 2)
        self.assertEqual(grid.text(1, 0), "ok")

    def test_row_without_cells_is_skipped(self) -> None:
        grid = grid_from_markup("<table><tr><td>h</td></tr><tr></tr><tr><td>x</td></tr></table>")
        assert grid is not None
        self.assertEqual(grid.height, 2)
        self.assertEqual(grid.text(1, 0), "x")

    def test_nested_table_rows_are_not_outer_rows(self) -> None:
        html = (
            "<table><tbody>"
            "<tr><td>outer<table><tr><td>inner</td></tr></table></td></tr>"
            "<tr><td>second</td></tr>"
            "</tbody></table>"
        )
        grid = grid_from_markup(html)
        assert grid is not None
        self.assertEqual(grid.height, 2)
        self.assertEqual(grid.text(1, 0), "second")


if __name__ == "__main__":
    unittest.main()
