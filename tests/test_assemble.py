import unittest

from mytimetable.assemble import assemble_slots
from mytimetable.axes import interpret_axes
from mytimetable.grid import build_grid
from mytimetable.model import CourseDescriptor, RawCell, TimeRange


def _grid(*rows):
    return build_grid([[c if isinstance(c, RawCell) else RawCell(c) for c in row] for row in rows])


class TestAssembleSlots(unittest.TestCase):
    def test_single_structured_cell(self) -> None:
        grid = _grid(
            ["节次", "时间", "星期三"],
            ["1", "08:00-09:40", "张三/王老师/中心校区-1号楼-101"],
        )
        slots = assemble_slots(grid, interpret_axes(grid))

        self.assertEqual(len(slots), 1)
        slot = slots[0]
        self.assertEqual(slot.day_of_week, 3)
        self.assertEqual(slot.start, TimeRange("08:00", "09:40"))
        self.assertEqual(slot.descriptor.course_name, "张三")
        self.assertEqual(slot.descriptor.teacher, "王老师")
        self.assertEqual(slot.descriptor.classroom, "101")

    def test_rowspan_uses_last_row_end_time_and_skips_placeholder(self) -> None:
        grid = _grid(
            ["节次", "时间", "星期三"],
            ["1", "08:00-08:45", RawCell("高等数学", row_span=2)],
            ["2", "08:55-09:40"],
        )
        seen = []

        def spy(text: str) -> CourseDescriptor:
            seen.append(text)
            return CourseDescriptor(course_name=text)

        slots = assemble_slots(grid, interpret_axes(grid), cell_parser=spy)

        self.assertEqual(len(slots), 1)
        self.assertEqual(slots[0].start_time, "08:00")
        self.assertEqual(slots[0].end_time, "09:40")
        self.assertEqual(seen, ["高等数学"])
        self.assertTrue(grid.cell(2, 2).is_placeholder)  # type: ignore[union-attr]

    def test_unresolved_axes_are_discarded_silently(self) -> None:
        grid = _grid(
            ["时间", "周一", "Notes"],
            ["08:00-09:40", "A", "ignored"],
            ["午休", "B", "ignored"],
        )
        slots = assemble_slots(grid, interpret_axes(grid))

        self.assertEqual([s.descriptor.course_name for s in slots], ["A"])

    def test_span_into_row_without_time_is_discarded(self) -> None:
        grid = _grid(
            ["时间", "周一"],
            ["08:00-09:40", RawCell("A", row_span=2)],
            ["午休"],
        )
        self.assertEqual(assemble_slots(grid, interpret_axes(grid)), [])

    def test_empty_cells_and_overlaps(self) -> None:
        grid = _grid(
            ["时间", "周一", "星期一"],
            ["08:00-09:40", "A", "B"],
            ["10:00-11:40", "", "C"],
        )
        slots = assemble_slots(grid, interpret_axes(grid))

        # both Monday 08:00 courses are kept
        self.assertEqual([(s.descriptor.course_name, s.day_of_week) for s in slots], [("A", 1), ("B", 1), ("C", 1)])


if __name__ == "__main__":
    unittest.main()
