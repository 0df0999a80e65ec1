"""
Test cases for configuration loading and validation.
"""
import os
import tempfile
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from temporal_gestures.config import ConfigError, TemporalConfig, load_config


class TestLoadConfig(unittest.TestCase):
    """Test YAML loading into dataclasses."""

    def _write(self, text: str) -> str:
        fd, path = tempfile.mkstemp(suffix=".yaml")
        with os.fdopen(fd, "w") as f:
            f.write(text)
        self.addCleanup(os.remove, path)
        return path

    def test_packaged_defaults(self):
        cfg = load_config()

        self.assertEqual(cfg.temporal.buffer_size, 30)
        self.assertAlmostEqual(cfg.temporal.ema_alpha, 0.3)
        self.assertEqual(cfg.temporal.majority_window_size, 5)
        self.assertEqual(cfg.temporal.max_gap_size, 2)
        self.assertEqual(cfg.recognizer.num_hands, 2)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/config.yaml")

    def test_partial_file_keeps_defaults(self):
        path = self._write("temporal:\n  buffer_size: 12\ncamera:\n  mirror: false\n")

        cfg = load_config(path)

        self.assertEqual(cfg.temporal.buffer_size, 12)
        self.assertEqual(cfg.temporal.majority_window_size, 5)
        self.assertFalse(cfg.camera.mirror)
        self.assertEqual(cfg.service.loop_interval_ms, 16.0)

    def test_empty_file(self):
        cfg = load_config(self._write(""))
        self.assertEqual(cfg.temporal, TemporalConfig())

    def test_invalid_value(self):
        with self.assertRaises(ConfigError):
            load_config(self._write("temporal:\n  ema_alpha: 1.5\n"))

    def test_unknown_key(self):
        with self.assertRaises(ConfigError):
            load_config(self._write("temporal:\n  window: 5\n"))

    def test_section_must_be_mapping(self):
        with self.assertRaises(ConfigError):
            load_config(self._write("temporal: 5\n"))


class TestTemporalConfig(unittest.TestCase):
    """Test validation of temporal options."""

    def test_window_size(self):
        TemporalConfig(majority_window_size=3)
        for size in (1, 4, 7):
            with self.assertRaises(ConfigError):
                TemporalConfig(majority_window_size=size)

    def test_ranges(self):
        with self.assertRaises(ConfigError):
            TemporalConfig(buffer_size=0)
        with self.assertRaises(ConfigError):
            TemporalConfig(ema_alpha=0.0)
        with self.assertRaises(ConfigError):
            TemporalConfig(max_gap_size=-1)

    def test_updated_returns_new_copy(self):
        cfg = TemporalConfig()
        updated = cfg.updated(buffer_size=10, ema_alpha=1.0)

        self.assertEqual(updated.buffer_size, 10)
        self.assertEqual(updated.ema_alpha, 1.0)
        self.assertEqual(cfg.buffer_size, 30)

    def test_config_error_is_value_error(self):
        with self.assertRaises(ValueError):
            TemporalConfig().updated(ema_alpha=2.0)


if __name__ == '__main__':
    unittest.main()
