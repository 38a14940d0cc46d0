from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from gmux.errors import ValidationError
from gmux.paths import display_path, expand_path, same_path, validate_directory


class PathHelperTests(unittest.TestCase):
    def test_expand_path_handles_tilde_forms(self) -> None:
        home = Path.home()
        self.assertEqual(expand_path("~"), home)
        self.assertEqual(expand_path("~/src/app"), home / "src" / "app")
        self.assertEqual(expand_path("/opt/~x"), Path("/opt/~x"))
        self.assertEqual(expand_path("~other"), Path("~other"))

    def test_display_path_is_home_relative(self) -> None:
        with mock.patch("gmux.paths.Path.home", return_value=Path("/home/dev")):
            self.assertEqual(display_path(Path("/home/dev")), "~")
            self.assertEqual(display_path(Path("/home/dev/src/app")), "~/src/app")
            self.assertEqual(display_path(Path("/srv/app")), "/srv/app")

    def test_same_path_compares_canonical_forms(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "real").mkdir()
            link = root / "link"
            os.symlink(root / "real", link)
            self.assertTrue(same_path(root / "real", link))
            self.assertTrue(same_path(root / "real" / ".." / "real", root / "real"))
            self.assertFalse(same_path(root / "real", root))


class ValidateDirectoryTests(unittest.TestCase):
    def test_accepts_existing_directory_and_trims(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(validate_directory(f"  {tmp}  "), Path(tmp))

    def test_rejects_blank_missing_and_file(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_directory("   ")
        self.assertEqual(str(ctx.exception), "directory path cannot be empty")

        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing"
            with self.assertRaises(ValidationError) as ctx:
                validate_directory(str(missing))
            self.assertTrue(str(ctx.exception).endswith("does not exist"))

            target = Path(tmp) / "file.txt"
            target.write_text("x", encoding="utf-8")
            with self.assertRaises(ValidationError) as ctx:
                validate_directory(str(target))
            self.assertTrue(str(ctx.exception).endswith("is not a directory"))


if __name__ == "__main__":
    unittest.main()
