"""
Test cases for the two-hand frame driver.
"""
import unittest

import numpy as np

from mask_factory import disc_mask, empty_mask
from skin_hand_tracker.coverage import MaskContractError
from skin_hand_tracker.geometry import Point
from skin_hand_tracker.hand import HandSide
from skin_hand_tracker.tracker import FrameResult, TwoHandTracker


class TestTwoHandTracker(unittest.TestCase):

    def setUp(self):
        self.tracker = TwoHandTracker()

    def test_two_separate_hands(self):
        mask = disc_mask([((100, 200), 40), ((300, 200), 40)])
        self.tracker.set_estimate(HandSide.LEFT, Point(300, 200))
        self.tracker.set_estimate(HandSide.RIGHT, Point(100, 200))

        result = self.tracker.process_frame(mask, [], empty_mask())

        self.assertEqual(result.frame_index, 0)
        self.assertLessEqual(result.left.distance_to(Point(300, 200)), 3)
        self.assertLessEqual(result.right.distance_to(Point(100, 200)), 3)
        self.assertFalse(result.intersecting)
        self.assertEqual(self.tracker.frame_count, 1)

    def test_no_hands_gives_sentinels(self):
        result = self.tracker.process_frame(empty_mask(), [], empty_mask())
        self.assertIsNone(result.left)
        self.assertIsNone(result.right)
        self.assertEqual(result.as_sentinels(), ((0, 0), (0, 0)))

    def test_follows_moving_hand(self):
        self.tracker.set_estimate(HandSide.LEFT, Point(150, 200))

        for frame in range(10):
            center = Point(150 + 6 * frame, 200)
            mask = disc_mask([(center.as_tuple(), 40)])
            # Movement everywhere on the hand disables smoothing lag
            result = self.tracker.process_frame(mask, [], mask)

            self.assertIsNotNone(result.left, f"frame {frame}")
            self.assertLessEqual(result.left.distance_to(center), 12, f"frame {frame}")
            self.assertIsNone(result.right)

        self.assertEqual(self.tracker.frame_count, 10)
        self.assertEqual(len(self.tracker.left.trail()), 10)

    def test_hand_accessor(self):
        self.assertIs(self.tracker.hand(HandSide.LEFT), self.tracker.left)
        self.assertIs(self.tracker.hand(HandSide.RIGHT), self.tracker.right)

    def test_reset(self):
        mask = disc_mask([((200, 200), 40)])
        self.tracker.set_estimate(HandSide.LEFT, Point(200, 200))
        self.tracker.process_frame(mask, [], empty_mask())

        self.tracker.reset()

        self.assertEqual(self.tracker.frame_count, 0)
        self.assertIsNone(self.tracker.left.position)
        self.assertEqual(self.tracker.left.trail(), [])

    def test_mismatched_masks_rejected(self):
        with self.assertRaises(MaskContractError):
            self.tracker.process_frame(empty_mask((100, 100)), [], empty_mask((120, 100)))
        self.assertEqual(self.tracker.frame_count, 0)

    def test_color_mask_rejected(self):
        color = np.zeros((100, 100, 3), dtype=np.uint8)
        with self.assertRaises(MaskContractError):
            self.tracker.process_frame(color, [], color)


class TestFrameResult(unittest.TestCase):

    def test_as_sentinels(self):
        result = FrameResult(3, Point(12, 34), None)
        self.assertEqual(result.as_sentinels(), ((12, 34), (0, 0)))


if __name__ == "__main__":
    unittest.main()
