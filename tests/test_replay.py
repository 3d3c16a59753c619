"""
Test cases for the mask replay command line tool.
"""
import csv
import json
import tempfile
import unittest
from pathlib import Path

import cv2

from mask_factory import disc_mask
from skin_hand_tracker.config import EXIT_INPUT_ERROR, EXIT_PROFILE_ERROR, EXIT_SUCCESS
from skin_hand_tracker.replay import main, parse_point


class TestParsePoint(unittest.TestCase):

    def test_valid_point(self):
        point = parse_point("420,300")
        self.assertEqual((point.x, point.y), (420, 300))

    def test_invalid_point(self):
        for text in ("420", "a,b", "1,2,3"):
            with self.subTest(text=text):
                with self.assertRaises(Exception):
                    parse_point(text)


class TestReplayMain(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_dir = Path(self._tmp.name)
        self.skin_dir = self.tmp_dir / "skin"
        self.skin_dir.mkdir()
        for frame in range(4):
            mask = disc_mask([((120, 200), 40), ((280 + 4 * frame, 200), 40)])
            cv2.imwrite(str(self.skin_dir / f"frame_{frame:03d}.png"), mask)
        self.output = self.tmp_dir / "positions.csv"

    def tearDown(self):
        self._tmp.cleanup()

    def run_main(self, *extra):
        return main([
            "--skin-dir", str(self.skin_dir),
            "--output", str(self.output),
            "--no-log-file",
            *extra,
        ])

    def read_rows(self):
        with open(self.output, newline="", encoding="utf-8") as f:
            return list(csv.reader(f))

    def test_writes_one_row_per_frame(self):
        code = self.run_main("--left-start", "280,200", "--right-start", "120,200")

        self.assertEqual(code, EXIT_SUCCESS)
        rows = self.read_rows()
        self.assertEqual(rows[0], ["frame", "left_x", "left_y", "right_x", "right_y"])
        self.assertEqual(len(rows), 5)
        self.assertEqual([row[0] for row in rows[1:]], ["0", "1", "2", "3"])

        left_x, left_y, right_x, right_y = (int(v) for v in rows[1][1:])
        self.assertLessEqual(abs(left_x - 280) + abs(left_y - 200), 6)
        self.assertLessEqual(abs(right_x - 120) + abs(right_y - 200), 6)

    def test_without_start_positions_hands_are_lost(self):
        self.assertEqual(self.run_main(), EXIT_SUCCESS)
        for row in self.read_rows()[1:]:
            self.assertEqual(row[1:], ["0", "0", "0", "0"])

    def test_explicit_movement_masks(self):
        movement_dir = self.tmp_dir / "movement"
        movement_dir.mkdir()
        for path in sorted(self.skin_dir.iterdir()):
            cv2.imwrite(str(movement_dir / path.name), disc_mask([]))

        code = self.run_main("--movement-dir", str(movement_dir), "--left-start", "280,200")
        self.assertEqual(code, EXIT_SUCCESS)

    def test_movement_frame_count_mismatch(self):
        movement_dir = self.tmp_dir / "movement"
        movement_dir.mkdir()
        cv2.imwrite(str(movement_dir / "frame_000.png"), disc_mask([]))

        self.assertEqual(self.run_main("--movement-dir", str(movement_dir)), EXIT_INPUT_ERROR)

    def test_missing_skin_dir(self):
        code = main(["--skin-dir", str(self.tmp_dir / "nope"), "--no-log-file"])
        self.assertEqual(code, EXIT_INPUT_ERROR)

    def test_empty_skin_dir(self):
        empty = self.tmp_dir / "empty"
        empty.mkdir()
        self.assertEqual(main(["--skin-dir", str(empty), "--no-log-file"]), EXIT_INPUT_ERROR)

    def test_bad_profile(self):
        profile = self.tmp_dir / "bad.json"
        profile.write_text(json.dumps({"pixelsPerCm": -1}), encoding="utf-8")
        self.assertEqual(self.run_main("--profile", str(profile)), EXIT_PROFILE_ERROR)

    def test_profile_is_applied(self):
        profile = self.tmp_dir / "studio.json"
        profile.write_text(json.dumps({"name": "studio", "pixelsPerCm": 3.0}), encoding="utf-8")
        code = self.run_main("--profile", str(profile), "--left-start", "280,200")
        self.assertEqual(code, EXIT_SUCCESS)


if __name__ == "__main__":
    unittest.main()
