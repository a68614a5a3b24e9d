"""Run external commands and capture their output."""

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Union

from ..exceptions import ErrorCode, VCSError
from ..logging_config import get_logger

logger = get_logger(__name__)


class CommandRunner(Protocol):
    """Runs one command in a working directory and returns its stdout.

    Implementations raise VCSError when the command cannot be run at all.
    A command that runs and exits non-zero is not an error: whatever it
    printed is returned.
    """

    def run(self, cwd: Union[str, Path], args: Sequence[str]) -> str: ...


def join_lines(text: str) -> str:
    """Newline-joined lines of ``text`` with no trailing empty line."""
    return "\n".join(text.splitlines())


@dataclass(frozen=True)
class SubprocessRunner:
    """CommandRunner backed by ``subprocess.run``.

    There is no timeout unless one is given: a hung command blocks the
    caller for as long as it runs.
    """

    timeout: Optional[float] = None

    def run(self, cwd: Union[str, Path], args: Sequence[str]) -> str:
        command = " ".join(args)
        logger.debug("exec: %s (cwd=%s)", command, cwd)
        try:
            result = subprocess.run(
                list(args),
                cwd=str(cwd),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise VCSError(
                f"Command timed out after {self.timeout}s: {command}",
                ErrorCode.LS201,
                context={"command": command, "cwd": str(cwd)},
            ) from e
        except (OSError, ValueError) as e:
            # ValueError: arguments the OS cannot take, such as an embedded NUL
            raise VCSError(
                f"Cannot run {command}: {e}",
                ErrorCode.LS200,
                context={"command": command, "cwd": str(cwd)},
            ) from e

        if result.returncode != 0:
            logger.debug("%s exited with %d: %s", command, result.returncode, result.stderr.strip())

        return join_lines(result.stdout)
