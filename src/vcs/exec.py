"""Run the local git executable."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)

GIT_BIN = "git"


@dataclass(frozen=True)
class ExecResult:
    stdout: str
    stderr: str


class GitCommandError(Exception):
    """Raised when git cannot be spawned or exits with a non-zero status."""

    def __init__(self, args: Sequence[str], message: str, returncode: int | None = None):
        super().__init__(message)
        self.command = " ".join([GIT_BIN, *args])
        self.returncode = returncode


def run_git(args: Sequence[str], *, cwd: str | Path) -> ExecResult:
    """Run ``git <args>`` in ``cwd`` and return its captured output.

    Raises:
        GitCommandError: If git is not installed, the working directory is
            unusable, or the command exits with a non-zero status.
    """
    git = shutil.which(GIT_BIN) or GIT_BIN
    logger.debug("running %s %s in %s", GIT_BIN, " ".join(args), cwd)

    try:
        result = subprocess.run(
            [git, *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        msg = f"git invocation failed: {exc}"
        raise GitCommandError(args, msg) from exc

    if result.returncode != 0:
        err = (result.stderr or "").strip()
        msg = f"git {' '.join(args)} exited with {result.returncode}: {err}"
        raise GitCommandError(args, msg, result.returncode)

    return ExecResult(stdout=result.stdout, stderr=result.stderr)


__all__ = ["ExecResult", "GitCommandError", "run_git"]
