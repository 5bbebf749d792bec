import unittest

from bounding_box import BoundingBox
from geometry import ScreenPoint


class BoundingBoxTests(unittest.TestCase):
    def test_from_points_is_minimal(self) -> None:
        bbox = BoundingBox.from_points(ScreenPoint(10, 70), ScreenPoint(50, 160), ScreenPoint(70, 80))
        self.assertEqual(bbox.min, ScreenPoint(10, 70))
        self.assertEqual(bbox.max, ScreenPoint(70, 160))

    def test_iteration_is_row_major(self) -> None:
        bbox = BoundingBox(ScreenPoint(1, 5), ScreenPoint(2, 6))
        self.assertEqual(
            list(bbox), [ScreenPoint(1, 5), ScreenPoint(2, 5), ScreenPoint(1, 6), ScreenPoint(2, 6)],
        )

    def test_iteration_is_restartable(self) -> None:
        bbox = BoundingBox(ScreenPoint(0, 0), ScreenPoint(3, 2))
        first = list(bbox)
        second = list(bbox)
        self.assertEqual(len(first), 12)
        self.assertEqual(first, second)

    def test_single_point_box(self) -> None:
        bbox = BoundingBox(ScreenPoint(4, 4), ScreenPoint(4, 4))
        self.assertEqual(list(bbox), [ScreenPoint(4, 4)])

    def test_clamp_partially_outside(self) -> None:
        bbox = BoundingBox(ScreenPoint(-20, -5), ScreenPoint(250, 90))
        bbox.clamp(ScreenPoint(0, 0), ScreenPoint(199, 199))
        self.assertEqual(bbox.min, ScreenPoint(0, 0))
        self.assertEqual(bbox.max, ScreenPoint(199, 90))
        self.assertFalse(bbox.is_empty)

    def test_clamp_keeps_box_within_range_or_empty(self) -> None:
        width, height = 50, 40
        boxes = [
            BoundingBox(ScreenPoint(-10, -10), ScreenPoint(-1, -1)),
            BoundingBox(ScreenPoint(60, 5), ScreenPoint(80, 30)),
            BoundingBox(ScreenPoint(5, 45), ScreenPoint(30, 70)),
            BoundingBox(ScreenPoint(-30, -30), ScreenPoint(100, 100)),
            BoundingBox(ScreenPoint(10, 10), ScreenPoint(20, 20)),
        ]
        for bbox in boxes:
            bbox.clamp(ScreenPoint(0, 0), ScreenPoint(width - 1, height - 1))
            if bbox.is_empty:
                self.assertEqual(list(bbox), [])
            else:
                self.assertTrue(0 <= bbox.min.x <= bbox.max.x <= width - 1)
                self.assertTrue(0 <= bbox.min.y <= bbox.max.y <= height - 1)

    def test_box_outside_range_enumerates_nothing(self) -> None:
        bbox = BoundingBox(ScreenPoint(-10, 3), ScreenPoint(-2, 8))
        bbox.clamp(ScreenPoint(0, 0), ScreenPoint(9, 9))
        self.assertTrue(bbox.is_empty)
        self.assertEqual(list(bbox), [])


if __name__ == "__main__":
    unittest.main()
