"""
Test cases for application logging setup.
"""
import logging
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from temporal_gestures.main import configure_logging


class TestConfigureLogging(unittest.TestCase):
    """Test log level resolution from config or environment values."""

    def test_known_level(self):
        self.assertEqual(configure_logging("warning"), logging.WARNING)
        self.assertEqual(configure_logging("ERROR"), logging.ERROR)

    def test_unknown_level_falls_back_to_info(self):
        with self.assertLogs("temporal_gestures.main", level="WARNING") as logs:
            self.assertEqual(configure_logging("loud"), logging.INFO)

        self.assertIn("loud", logs.output[0])


if __name__ == '__main__':
    unittest.main()
