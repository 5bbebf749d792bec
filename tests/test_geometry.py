import unittest

import numpy as np

from geometry import ScreenPoint, cross, normalize


class ScreenPointTests(unittest.TestCase):
    def test_add_is_component_wise(self) -> None:
        self.assertEqual(ScreenPoint(3, -4) + ScreenPoint(10, 7), ScreenPoint(13, 3))

    def test_sub_is_component_wise(self) -> None:
        self.assertEqual(ScreenPoint(70, 80) - ScreenPoint(10, 70), ScreenPoint(60, 10))
        self.assertEqual(ScreenPoint(0, 0) - ScreenPoint(5, -2), ScreenPoint(-5, 2))

    def test_result_is_a_screen_point(self) -> None:
        result = ScreenPoint(1, 2) + ScreenPoint(3, 4)
        self.assertIsInstance(result, ScreenPoint)
        self.assertEqual(len(result), 2)
        self.assertEqual((result.x, result.y), (4, 6))


class VectorTests(unittest.TestCase):
    def test_cross_matches_numpy(self) -> None:
        a, b = (60, 40, -40), (10, 90, -30)
        self.assertEqual(cross(a, b), (2400, 1400, 5000))
        self.assertEqual(cross(a, b), tuple(np.cross(a, b).tolist()))

    def test_normalize(self) -> None:
        np.testing.assert_allclose(normalize(np.array([3.0, 0.0, 4.0])), [0.6, 0.0, 0.8])

    def test_normalize_zero_vector(self) -> None:
        np.testing.assert_array_equal(normalize(np.zeros(3)), np.zeros(3))


if __name__ == "__main__":
    unittest.main()
