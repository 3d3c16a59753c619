"""
Test cases for JSON calibration profiles.
"""
import json
import sys
import tempfile
import unittest
from pathlib import Path

# Add the project root to the path to allow direct imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from skin_hand_tracker.config import HISTORY_SIZE, FRAMES_PER_SECOND
from skin_hand_tracker.profile_loader import ProfileLoadError, load_profile, parse_profile


class TestLoadProfile(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def write_profile(self, content, name="profile.json"):
        path = self.tmp_dir / name
        if not isinstance(content, str):
            content = json.dumps(content)
        path.write_text(content, encoding="utf-8")
        return path

    def test_valid_profile(self):
        path = self.write_profile({
            "name": "studio",
            "pixelsPerCm": 3.2,
            "fps": 25,
            "historySize": 30,
            "smoothingWindow": 4,
            "faceCoverageThreshold": 180,
        })

        profile = load_profile(path)

        self.assertEqual(profile.name, "studio")
        self.assertEqual(profile.config.pixels_per_cm, 3.2)
        self.assertEqual(profile.config.fps, 25.0)
        self.assertEqual(profile.config.history_size, 30)
        self.assertEqual(profile.config.smoothing_window, 4)
        self.assertEqual(profile.config.face_coverage_threshold, 180)

    def test_missing_keys_use_defaults(self):
        profile = load_profile(self.write_profile({}))
        self.assertEqual(profile.name, "default")
        self.assertEqual(profile.config.history_size, HISTORY_SIZE)
        self.assertEqual(profile.config.fps, FRAMES_PER_SECOND)

    def test_integer_valued_float_accepted_for_int_field(self):
        profile = load_profile(self.write_profile({"historySize": 25.0}))
        self.assertEqual(profile.config.history_size, 25)
        self.assertIsInstance(profile.config.history_size, int)

    def test_unknown_keys_are_ignored(self):
        with self.assertLogs("SkinHandTracker.ProfileLoader", level="WARNING"):
            profile = load_profile(self.write_profile({"cameraIndex": 2}))
        self.assertEqual(profile.config.history_size, HISTORY_SIZE)

    def test_missing_file(self):
        with self.assertRaises(ProfileLoadError):
            load_profile(self.tmp_dir / "missing.json")

    def test_directory_is_not_a_profile(self):
        with self.assertRaises(ProfileLoadError):
            load_profile(self.tmp_dir)

    def test_invalid_json(self):
        with self.assertRaises(ProfileLoadError):
            load_profile(self.write_profile("{not json"))

    def test_invalid_values(self):
        bad_profiles = [
            {"pixelsPerCm": 0},
            {"fps": -30},
            {"historySize": 2},
            {"historySize": 4, "smoothingWindow": 5},
            {"pixelsPerCm": "four"},
            {"historySize": True},
            {"historySize": 20.5},
        ]
        for data in bad_profiles:
            with self.subTest(data=data):
                with self.assertRaises(ProfileLoadError):
                    load_profile(self.write_profile(data))

    def test_top_level_must_be_object(self):
        with self.assertRaises(ProfileLoadError):
            parse_profile([1, 2, 3])


if __name__ == "__main__":
    unittest.main()
