from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence


class ToolExecutionError(Exception):
    """The external tool could not be started or did not finish in time."""


@dataclass(frozen=True)
class ToolRun:
    returncode: int
    stdout: str
    stderr: str


def run_tool(
    cmd: Sequence[str],
    *,
    cwd: Path,
    timeout: float,
    env: dict[str, str] | None = None,
) -> ToolRun:
    """Run an external command and capture its output.

    A non-zero exit code is returned to the caller; only a missing binary,
    an OS-level failure, or an exceeded time limit raise.

    Raises:
        ToolExecutionError: If the command cannot run or exceeds ``timeout`` seconds
    """
    merged_env = os.environ.copy()
    merged_env.update(env or {})
    try:
        proc = subprocess.run(
            list(cmd),
            cwd=cwd,
            env=merged_env,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise ToolExecutionError(f"{cmd[0]} timed out after {timeout:g}s") from e
    except FileNotFoundError as e:
        raise ToolExecutionError(f"{cmd[0]} is not installed") from e
    except OSError as e:
        raise ToolExecutionError(f"{cmd[0]} could not be started: {e}") from e
    return ToolRun(returncode=proc.returncode, stdout=proc.stdout or "", stderr=proc.stderr or "")


def tail(text: str, limit: int = 500) -> str:
    text = text.strip()
    return text if len(text) <= limit else "..." + text[-limit:]
