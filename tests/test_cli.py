"""One-shot CLI behavior tests.

Verifies ``gmux.cli.main`` subcommands against a temp config store and that
errors become a ``gmux:`` message with exit status 1.
"""

from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from gmux import cli
from gmux.config import AppConfig, ConfigStore, EntryConfig
from gmux.errors import EntryNotFoundError


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.app = self.root / "app"
        self.web = self.root / "web"
        self.app.mkdir()
        self.web.mkdir()
        self.store = ConfigStore(path=self.root / "config.json", legacy_path=None)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_cli(self, *argv: str) -> tuple[int, str, str]:
        out = io.StringIO()
        err = io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = cli.main(list(argv), store=self.store)
        return code, out.getvalue(), err.getvalue()

    def seed(self, *entries: EntryConfig, default_editor: str | None = None) -> None:
        self.store.save(AppConfig(entries=list(entries), default_editor=default_editor))


class CliAddTests(CliTestCase):
    def test_add_registers_directory_and_default_editor(self) -> None:
        code, out, _ = self.run_cli("add", str(self.app), "-e", "nvim")
        self.assertEqual(code, 0)
        self.assertTrue(out.startswith("Added "))
        loaded = self.store.load()
        self.assertEqual(loaded.entries, [EntryConfig(path=self.app, editor="nvim")])
        self.assertEqual(loaded.default_editor, "nvim")

    def test_add_existing_directory_updates_in_place(self) -> None:
        self.seed(EntryConfig(path=self.app, editor="vim"), EntryConfig(path=self.web))
        code, out, _ = self.run_cli("add", str(self.app) + "/")
        self.assertEqual(code, 0)
        self.assertTrue(out.startswith("Updated "))
        loaded = self.store.load()
        self.assertEqual(len(loaded.entries), 2)
        self.assertIsNone(loaded.entries[0].editor)

    def test_add_missing_directory_fails(self) -> None:
        code, out, err = self.run_cli("add", str(self.root / "missing"))
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertTrue(err.startswith("gmux: "))
        self.assertIn("does not exist", err)


class CliListTests(CliTestCase):
    def test_empty_list_message(self) -> None:
        code, out, _ = self.run_cli("list")
        self.assertEqual(code, 0)
        self.assertEqual(out, "No directories registered.\n")

    def test_json_list_includes_index_branch_and_editor(self) -> None:
        self.seed(EntryConfig(path=self.app, editor="code"), EntryConfig(path=self.root / "gone"))
        code, out, _ = self.run_cli("list", "--json")
        self.assertEqual(code, 0)
        rows = json.loads(out)
        self.assertEqual([row["index"] for row in rows], [1, 2])
        self.assertEqual(rows[0]["editor"], "code")
        self.assertEqual(rows[1]["branch"], "missing")
        self.assertIsNone(rows[1]["editor"])

    def test_table_list_is_numbered(self) -> None:
        self.seed(EntryConfig(path=self.app), EntryConfig(path=self.web, editor="vim"))
        _, out, _ = self.run_cli("list")
        lines = out.splitlines()
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].startswith(" 1. "))
        self.assertTrue(lines[1].startswith(" 2. "))
        self.assertTrue(lines[1].endswith("vim"))


class CliEditRemoveOpenTests(CliTestCase):
    def test_resolve_target_accepts_index_and_path(self) -> None:
        entries = [EntryConfig(path=self.app), EntryConfig(path=self.web)]
        self.assertEqual(cli.resolve_target(entries, "2"), 1)
        self.assertEqual(cli.resolve_target(entries, str(self.app)), 0)
        with self.assertRaises(EntryNotFoundError):
            cli.resolve_target(entries, "3")
        with self.assertRaises(EntryNotFoundError):
            cli.resolve_target([], "1")

    def test_non_ascii_digits_are_treated_as_paths(self) -> None:
        self.seed(EntryConfig(path=self.app))
        code, out, err = self.run_cli("remove", "\u00b2")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertEqual(err, "gmux: entry not found: \u00b2\n")
        self.assertEqual(self.store.load().entries, [EntryConfig(path=self.app)])

    def test_edit_changes_path_and_editor(self) -> None:
        self.seed(EntryConfig(path=self.app))
        code, out, _ = self.run_cli("edit", "1", "--path", str(self.web), "-e", "hx")
        self.assertEqual(code, 0)
        self.assertTrue(out.startswith("Updated "))
        loaded = self.store.load()
        self.assertEqual(loaded.entries, [EntryConfig(path=self.web, editor="hx")])
        self.assertEqual(loaded.default_editor, "hx")

    def test_edit_with_blank_editor_clears_override(self) -> None:
        self.seed(EntryConfig(path=self.app, editor="vim"), default_editor="vim")
        code, _, _ = self.run_cli("edit", str(self.app), "-e", "")
        self.assertEqual(code, 0)
        loaded = self.store.load()
        self.assertIsNone(loaded.entries[0].editor)
        self.assertEqual(loaded.default_editor, "vim")

    def test_edit_without_changes_fails(self) -> None:
        self.seed(EntryConfig(path=self.app))
        code, _, err = self.run_cli("edit", "1")
        self.assertEqual(code, 1)
        self.assertEqual(err, "gmux: nothing to update\n")

    def test_remove_by_index(self) -> None:
        self.seed(EntryConfig(path=self.app), EntryConfig(path=self.web))
        code, out, _ = self.run_cli("remove", "1")
        self.assertEqual(code, 0)
        self.assertTrue(out.startswith("Removed "))
        self.assertEqual(self.store.load().entries, [EntryConfig(path=self.web)])

    def test_remove_unknown_target_fails(self) -> None:
        self.seed(EntryConfig(path=self.app))
        code, _, err = self.run_cli("remove", str(self.web))
        self.assertEqual(code, 1)
        self.assertIn("entry not found", err)

    def test_open_uses_override_then_entry_then_default(self) -> None:
        self.seed(EntryConfig(path=self.app, editor="vim"), EntryConfig(path=self.web), default_editor="code")
        with mock.patch("gmux.cli.launch_editor") as launch_mock:
            self.assertEqual(self.run_cli("open", "1", "-e", "hx")[0], 0)
            self.assertEqual(self.run_cli("open", "1")[0], 0)
            code, out, _ = self.run_cli("open", "2")

        self.assertEqual(code, 0)
        self.assertTrue(out.startswith("Opening "))
        self.assertEqual(
            [call.args for call in launch_mock.call_args_list],
            [("hx", self.app), ("vim", self.app), ("code", self.web)],
        )

    def test_corrupt_config_reports_error(self) -> None:
        self.store.path.write_text("{broken", encoding="utf-8")
        code, _, err = self.run_cli("list")
        self.assertEqual(code, 1)
        self.assertIn("failed to parse config", err)


class CliInteractiveTests(CliTestCase):
    def test_no_subcommand_starts_interactive_mode(self) -> None:
        with mock.patch("gmux.runtime.app.run_tui") as run_tui:
            code, _, _ = self.run_cli()
        self.assertEqual(code, 0)
        run_tui.assert_called_once_with(self.store)


if __name__ == "__main__":
    unittest.main()
