from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from gmux.config import ConfigStore
from gmux.runtime import app
from gmux.session import STATUS_ERROR


class BuildSessionTests(unittest.TestCase):
    def test_loaded_config_is_used(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text('{"entries": [{"path": "/srv/app"}], "default_editor": "vim"}', encoding="utf-8")
            session = app.build_session(ConfigStore(path=path, legacy_path=None), prober=mock.Mock())
        self.assertEqual([entry.path for entry in session.entries], [Path("/srv/app")])
        self.assertEqual(session.config.default_editor, "vim")
        self.assertIsNone(session.status)

    def test_unreadable_config_starts_empty_with_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{oops", encoding="utf-8")
            session = app.build_session(ConfigStore(path=path, legacy_path=None), prober=mock.Mock())
        self.assertEqual(session.entries, [])
        self.assertEqual(session.status.kind, STATUS_ERROR)
        self.assertIn("failed to parse config", session.status.text)

    def test_undecodable_config_starts_empty_with_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_bytes(b"\xff\xfe garbage")
            session = app.build_session(ConfigStore(path=path, legacy_path=None), prober=mock.Mock())
        self.assertEqual(session.entries, [])
        self.assertEqual(session.status.kind, STATUS_ERROR)
        self.assertIn("failed to read config", session.status.text)

    def test_run_tui_requires_a_terminal(self) -> None:
        with mock.patch("gmux.runtime.app.sys.stdin") as stdin_mock:
            stdin_mock.isatty.return_value = False
            with self.assertRaises(SystemExit):
                app.run_tui(ConfigStore(path=Path("/nonexistent/gmux.json"), legacy_path=None))


if __name__ == "__main__":
    unittest.main()
