"""Git branch and diff probing for registered directories.

Each probe shells out to ``git`` in the entry directory. Failures surface as
``ProbeError`` and are folded into a per-entry ``BranchError`` status so one
broken repository never stops the refresh of the others.
"""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .errors import ProbeError

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 5.0
_NUMBER_RE = re.compile(r"\d+")


@dataclass(frozen=True)
class DiffStat:
    additions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class BranchUnknown:
    def text(self) -> str:
        return "…"


@dataclass(frozen=True)
class BranchReady:
    name: str
    additions: int = 0
    deletions: int = 0

    def changes(self) -> list[str]:
        parts: list[str] = []
        if self.additions > 0:
            parts.append(f"+{self.additions}")
        if self.deletions > 0:
            parts.append(f"-{self.deletions}")
        return parts

    def text(self) -> str:
        changes = self.changes()
        if not changes:
            return self.name
        return f"{self.name} ({' '.join(changes)})"


@dataclass(frozen=True)
class BranchMissing:
    def text(self) -> str:
        return "missing"


@dataclass(frozen=True)
class BranchNotGit:
    def text(self) -> str:
        return "not a repo"


@dataclass(frozen=True)
class BranchError:
    message: str

    def text(self) -> str:
        return self.message


BranchStatus = Union[BranchUnknown, BranchReady, BranchMissing, BranchNotGit, BranchError]


def parse_shortstat(output: str) -> DiffStat:
    """Parse ``git diff --shortstat`` output into insertion/deletion counts."""
    additions = 0
    deletions = 0
    for part in output.split(","):
        part = part.strip()
        if not part:
            continue
        number = _NUMBER_RE.search(part)
        if number is None:
            continue
        if "insertion" in part:
            additions = int(number.group(0))
        elif "deletion" in part:
            deletions = int(number.group(0))
    return DiffStat(additions=additions, deletions=deletions)


class GitProber:
    """Run the git queries needed for one entry's branch status."""

    def __init__(self, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> None:
        self.timeout_seconds = timeout_seconds

    def _run_git(self, path: Path, args: list[str]) -> subprocess.CompletedProcess[str]:
        try:
            return subprocess.run(
                ["git", "-C", str(path), *args],
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.timeout_seconds,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise ProbeError(f"failed to invoke git in {path}: {exc}") from exc

    def is_repository(self, path: Path) -> bool:
        try:
            proc = self._run_git(path, ["rev-parse", "--show-toplevel"])
        except ProbeError:
            return False
        return proc.returncode == 0

    def current_branch(self, path: Path) -> str:
        proc = self._run_git(path, ["rev-parse", "--abbrev-ref", "HEAD"])
        if proc.returncode != 0:
            # Unborn branch: HEAD names a ref that has no commit yet.
            unborn = self._run_git(path, ["symbolic-ref", "--short", "-q", "HEAD"])
            if unborn.returncode == 0 and unborn.stdout.strip():
                return unborn.stdout.strip()
            raise ProbeError(f"git rev-parse failed for {path}")
        branch = proc.stdout.strip()
        if branch == "HEAD":
            short = self._run_git(path, ["rev-parse", "--short", "HEAD"])
            if short.returncode == 0:
                branch = f"detached@{short.stdout.strip()}"
        return branch

    def diff_counts(self, path: Path) -> DiffStat:
        # Repositories without commits have no HEAD to diff against.
        for args in (["diff", "--shortstat", "HEAD"], ["diff", "--shortstat"]):
            proc = self._run_git(path, args)
            if proc.returncode == 0:
                return parse_shortstat(proc.stdout)
        raise ProbeError(f"git diff failed for {path}")


def branch_status_for(path: Path, prober: GitProber) -> BranchStatus:
    """Compute the branch status for ``path``.

    Missing paths, plain files, and non-repositories short-circuit before any
    branch query is issued.
    """
    if not path.exists():
        return BranchMissing()
    if not path.is_dir():
        return BranchError("not a dir")
    if not prober.is_repository(path):
        return BranchNotGit()
    try:
        name = prober.current_branch(path)
    except ProbeError as exc:
        logger.debug("branch probe failed for %s: %s", path, exc)
        return BranchError(str(exc))
    try:
        diff = prober.diff_counts(path)
    except ProbeError as exc:
        logger.debug("diff probe failed for %s: %s", path, exc)
        diff = DiffStat()
    return BranchReady(name=name, additions=diff.additions, deletions=diff.deletions)
