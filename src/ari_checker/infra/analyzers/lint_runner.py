from __future__ import annotations

import json
from enum import Enum
from pathlib import Path

from ...core.domain.models import LintReport
from ...core.ports import LoggerPort
from .process import ToolExecutionError, run_tool, tail


BASELINE_CONFIG = Path(__file__).parent / "resources" / "eslint.baseline.config.mjs"

FLAT_CONFIG_FILES = (
    "eslint.config.js",
    "eslint.config.mjs",
    "eslint.config.cjs",
    "eslint.config.ts",
)

LEGACY_CONFIG_FILES = (
    ".eslintrc",
    ".eslintrc.js",
    ".eslintrc.cjs",
    ".eslintrc.json",
    ".eslintrc.yml",
    ".eslintrc.yaml",
)


class ConfigKind(str, Enum):
    FLAT = "flat"
    LEGACY = "legacy"


def repo_config_kind(workdir: Path) -> ConfigKind | None:
    """Which ESLint configuration system the repository uses, if any.

    A flat config wins over eslintrc files, matching ESLint's own lookup.
    """
    if any((workdir / name).is_file() for name in FLAT_CONFIG_FILES):
        return ConfigKind.FLAT
    if any((workdir / name).is_file() for name in LEGACY_CONFIG_FILES):
        return ConfigKind.LEGACY
    manifest = workdir / "package.json"
    if manifest.is_file():
        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return None
        if isinstance(data, dict) and "eslintConfig" in data:
            return ConfigKind.LEGACY
    return None


def parse_eslint_report(stdout: str) -> tuple[int, int]:
    """Sum error and warning counts from ESLint's JSON formatter output.

    Raises:
        ValueError: If the output is not an ESLint JSON report
    """
    results = json.loads(stdout)
    if not isinstance(results, list):
        raise ValueError("ESLint report is not a list of file results")
    errors = 0
    warnings = 0
    for entry in results:
        if not isinstance(entry, dict):
            raise ValueError("ESLint report entry is not an object")
        errors += int(entry.get("errorCount", 0))
        warnings += int(entry.get("warningCount", 0))
    return errors, warnings


class LintRunner:
    """Counts lint diagnostics over the working area's script sources.

    When ESLint cannot produce a report, the fixed penalty is returned so that
    a missing signal scores as risk rather than as a clean result.
    """

    def __init__(
        self,
        *,
        logger: LoggerPort,
        timeout: float = 180.0,
        baseline_config: Path = BASELINE_CONFIG,
    ) -> None:
        self._logger = logger
        self._timeout = timeout
        self._baseline_config = baseline_config

    def build_command(self, workdir: Path) -> list[str]:
        cmd = ["npx", "--no-install", "eslint", ".", "--format", "json"]
        if repo_config_kind(workdir) is None:
            cmd += ["--config", str(self._baseline_config)]
        return cmd

    def build_env(self, workdir: Path) -> dict[str, str]:
        # eslintrc files are only read when flat-config mode is switched off
        legacy = repo_config_kind(workdir) is ConfigKind.LEGACY
        return {"ESLINT_USE_FLAT_CONFIG": "false" if legacy else "true"}

    def run(self, workdir: Path) -> LintReport:
        cmd = self.build_command(workdir)
        env = self.build_env(workdir)
        self._logger.info("lint_started", type="lint_started", command=cmd, env=env)
        try:
            run = run_tool(cmd, cwd=workdir, timeout=self._timeout, env=env)
        except ToolExecutionError as e:
            return LintReport.penalty(str(e))

        # 0: clean, 1: lint problems found, 2+: configuration or internal error
        if run.returncode not in (0, 1):
            return LintReport.penalty(f"eslint exited with {run.returncode}: {tail(run.stderr or run.stdout)}")

        try:
            errors, warnings = parse_eslint_report(run.stdout)
        except (ValueError, TypeError) as e:
            return LintReport.penalty(f"unreadable eslint output: {e}")

        self._logger.info("lint_finished", type="lint_finished", errors=errors, warnings=warnings)
        return LintReport(errors=errors, warnings=warnings)
