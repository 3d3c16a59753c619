"""
Test cases for pixel points, sentinel conversion and blob records.
"""
import sys
import unittest
from pathlib import Path

# Add the project root to the path to allow direct imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from skin_hand_tracker.blobs import BlobInformation, BlobType
from skin_hand_tracker.geometry import Point, from_sentinel, to_sentinel


class TestPoint(unittest.TestCase):

    def test_arithmetic(self):
        self.assertEqual(Point(3, 4) + Point(1, -2), Point(4, 2))
        self.assertEqual(Point(3, 4) - Point(1, -2), Point(2, 6))
        self.assertEqual(Point(3, 4).offset(-3, 1), Point(0, 5))

    def test_distance(self):
        self.assertAlmostEqual(Point(0, 0).distance_to(Point(3, 4)), 5.0)

    def test_points_are_hashable_values(self):
        self.assertEqual(len({Point(1, 2), Point(1, 2), Point(2, 1)}), 2)


class TestSentinel(unittest.TestCase):

    def test_none_is_encoded_as_origin(self):
        self.assertEqual(to_sentinel(None), (0, 0))
        self.assertEqual(to_sentinel(Point(7, 9)), (7, 9))

    def test_origin_is_decoded_as_none(self):
        self.assertIsNone(from_sentinel((0, 0)))
        self.assertEqual(from_sentinel((7, 9)), Point(7, 9))


class TestBlobInformation(unittest.TestCase):

    def test_from_bounds(self):
        blob = BlobInformation.from_bounds(10, 20, 50, 120, BlobType.MEDIUM)
        self.assertEqual(blob.width, 40)
        self.assertEqual(blob.height, 100)
        self.assertEqual(blob.top, Point(30, 20))
        self.assertIs(blob.type, BlobType.MEDIUM)

    def test_contains_includes_edges(self):
        blob = BlobInformation.from_bounds(10, 20, 50, 120)
        self.assertTrue(blob.contains(Point(10, 20)))
        self.assertTrue(blob.contains(Point(50, 120)))
        self.assertFalse(blob.contains(Point(51, 60)))
        self.assertFalse(blob.contains(Point(30, 19)))
        self.assertIs(blob.type, BlobType.UNKNOWN)


if __name__ == "__main__":
    unittest.main()
