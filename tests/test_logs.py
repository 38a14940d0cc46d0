from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from gmux.logs import LOG_FILE_ENV, LOGGER_NAME, configure_logging


class ConfigureLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        configure_logging()

    def test_default_installs_only_null_handler(self) -> None:
        logger = configure_logging()
        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0], logging.NullHandler)
        self.assertFalse(logger.propagate)
        self.assertEqual(logger.level, logging.INFO)

    def test_log_file_receives_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "logs" / "gmux.log"
            logger = configure_logging(log_path, verbose=True)
            logging.getLogger(f"{LOGGER_NAME}.config").debug("saved %d entries", 3)
            for handler in logger.handlers:
                handler.flush()
            text = log_path.read_text(encoding="utf-8")
            configure_logging()
        self.assertIn("DEBUG gmux.config: saved 3 entries", text)

    def test_environment_variable_selects_log_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "env.log"
            with mock.patch.dict("gmux.logs.os.environ", {LOG_FILE_ENV: str(log_path)}):
                logger = configure_logging()
            self.assertIsInstance(logger.handlers[0], logging.FileHandler)
            configure_logging()

    def test_reconfiguring_replaces_handlers(self) -> None:
        configure_logging()
        logger = configure_logging()
        self.assertEqual(len(logger.handlers), 1)


if __name__ == "__main__":
    unittest.main()
