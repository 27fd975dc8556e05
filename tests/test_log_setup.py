import logging
import os
import re
import tempfile
import unittest

from vboxctl.log_setup import rotate_if_oversized, setup_logging

from tests.fakes import reset_logging

LINE = re.compile(r"^> \d{8}-\d{6} \| (.*)$")


class LogSetupTest(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.log_file = os.path.join(self.tmp.name, "vbox-manage.log")

    def tearDown(self):
        reset_logging()
        self.tmp.cleanup()

    def _lines(self, path=None):
        for handler in logging.getLogger("vboxctl").handlers:
            handler.flush()
        with open(path or self.log_file, encoding="utf-8") as f:
            return f.read().splitlines()

    def test_line_format(self):
        logger = setup_logging(self.log_file)
        logging.getLogger("vboxctl.dispatch").info("Command is start...")

        lines = self._lines()
        self.assertEqual(len(lines), 1)
        match = LINE.match(lines[0])
        self.assertIsNotNone(match)
        self.assertEqual(match.group(1), "Command is start...")
        self.assertFalse(logger.propagate)

    def test_repeated_setup_keeps_one_file_handler(self):
        setup_logging(self.log_file)
        logger = setup_logging(self.log_file)
        self.assertEqual(len(logger.handlers), 1)

    def test_verbose_adds_console_handler(self):
        logger = setup_logging(self.log_file, verbose=True)
        self.assertEqual(len(logger.handlers), 2)

    def test_appends_to_existing_log(self):
        with open(self.log_file, "w", encoding="utf-8") as f:
            f.write("> 20180101-000000 | earlier run\n")
        setup_logging(self.log_file).info("later run")

        self.assertEqual(self._lines()[0], "> 20180101-000000 | earlier run")
        self.assertEqual(LINE.match(self._lines()[1]).group(1), "later run")

    def test_small_log_is_not_rotated(self):
        logger = setup_logging(self.log_file, max_bytes=1000)
        logger.info("short")
        self.assertFalse(rotate_if_oversized(logger, self.log_file, 1000))
        self.assertFalse(os.path.exists(self.log_file + ".1"))

    def test_oversized_log_is_rotated_with_marker(self):
        with open(self.log_file, "w", encoding="utf-8") as f:
            f.write("old line\n" * 100)
        logger = setup_logging(self.log_file, max_bytes=100000)

        self.assertTrue(rotate_if_oversized(logger, self.log_file, 500))

        lines = self._lines()
        self.assertEqual(len(lines), 1)
        self.assertEqual(LINE.match(lines[0]).group(1),
                         "log file has exceeded 500 bytes; running cleanup")
        self.assertEqual(self._lines(self.log_file + ".1"), ["old line"] * 100)

    def test_missing_log_is_not_rotated(self):
        logger = logging.getLogger("vboxctl")
        self.assertFalse(rotate_if_oversized(logger, os.path.join(self.tmp.name, "absent.log"), 1))


if __name__ == '__main__':
    unittest.main()
