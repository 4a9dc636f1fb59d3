from __future__ import annotations

from pathlib import Path

from ...core.ports import LoggerPort
from .process import ToolExecutionError, run_tool, tail


INSTALL_CMD = (
    "npm",
    "install",
    "--ignore-scripts",
    "--no-audit",
    "--no-fund",
    "--no-progress",
    "--loglevel=error",
)


class DependencyInstaller:
    """Best-effort `npm install` with lifecycle scripts disabled."""

    def __init__(self, *, logger: LoggerPort, timeout: float = 300.0) -> None:
        self._logger = logger
        self._timeout = timeout

    def install(self, workdir: Path) -> bool:
        try:
            run = run_tool(
                INSTALL_CMD,
                cwd=workdir,
                timeout=self._timeout,
                env={"npm_config_ignore_scripts": "true", "CI": "true"},
            )
        except ToolExecutionError as e:
            self._logger.warning("dependency_install_failed", type="dependency_install_failed", reason=str(e))
            return False

        if run.returncode != 0:
            self._logger.warning(
                "dependency_install_failed",
                type="dependency_install_failed",
                reason=f"npm install exited with {run.returncode}",
                stderr=tail(run.stderr),
            )
            return False
        return True
