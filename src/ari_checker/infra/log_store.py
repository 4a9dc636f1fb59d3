from __future__ import annotations

from pathlib import Path

from .logging.handlers import run_log_path
from .logging.log_summary import (
    format_single_summary,
    format_summary_table,
    parse_run_log,
    summarize_logs,
)


class RunLogStore:
    """Reads the JSONL run logs written by AnalysisLogger."""

    def __init__(self, *, logs_dir: Path) -> None:
        self._logs_dir = logs_dir

    def read_log(self, target: str, verbose: bool) -> list[str]:
        """Raw log lines when ``verbose``, otherwise a short summary.

        Raises:
            FileNotFoundError: If the target has no log file
        """
        log_fp = run_log_path(self._logs_dir, target)
        if not log_fp.exists():
            raise FileNotFoundError(f"Log file not found: {log_fp}")

        if verbose:
            return log_fp.read_text(encoding="utf-8").splitlines()
        return format_single_summary(parse_run_log(log_fp))

    def summarize_all(self, verbose: bool) -> list[str]:
        return format_summary_table(summarize_logs(self._logs_dir), verbose=verbose)
