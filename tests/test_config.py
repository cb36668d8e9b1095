import logging
import os
import unittest

from notegraph.config import Settings, _csv
from notegraph.graph.extract import DEFAULT_STATUS_MARKERS
from notegraph.logging_setup import APP_LOGGER, setup_logging


class TestConfig(unittest.TestCase):
    def test_csv(self):
        self.assertEqual(_csv(" Index, JavaScript Notes Index ,,"), ("Index", "JavaScript Notes Index"))
        self.assertEqual(_csv(""), ())

    def test_settings_types(self):
        s = Settings()
        self.assertIsInstance(s.default_roots, tuple)
        self.assertIsInstance(s.workers, int)
        self.assertIn(s.report_format, ("json", "table"))
        self.assertTrue(s.status_markers)

    @unittest.skipIf("NOTEGRAPH_STATUS_MARKERS" in os.environ, "markers overridden in the environment")
    def test_default_markers_come_from_extractor(self):
        self.assertEqual(Settings().status_markers, DEFAULT_STATUS_MARKERS)

    def test_setup_logging_is_idempotent(self):
        a = setup_logging("DEBUG")
        b = setup_logging("warning")
        self.assertIs(a, b)
        self.assertEqual(a.name, APP_LOGGER)
        self.assertEqual(len(a.handlers), 1)
        self.assertEqual(a.level, logging.WARNING)

    def test_unknown_level_falls_back(self):
        self.assertEqual(setup_logging("loud").level, logging.WARNING)


if __name__ == "__main__":
    unittest.main()
