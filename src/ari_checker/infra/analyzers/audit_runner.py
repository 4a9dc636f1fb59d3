from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ...core.domain.models import AuditReport
from ...core.ports import LoggerPort
from .process import ToolExecutionError, run_tool


AUDIT_CMD = ("npm", "audit", "--json")


def parse_audit_report(stdout: str) -> tuple[int, int]:
    """Extract (critical, high) counts from `npm audit --json` output.

    Raises:
        ValueError: If the output is an npm error object or lacks the summary block
    """
    data: Any = json.loads(stdout)
    if not isinstance(data, dict):
        raise ValueError("audit output is not a JSON object")
    if "error" in data:
        error = data["error"]
        summary = error.get("summary") if isinstance(error, dict) else error
        raise ValueError(f"npm audit reported an error: {summary}")

    vulns = (data.get("metadata") or {}).get("vulnerabilities")
    if not isinstance(vulns, dict):
        raise ValueError("audit output has no metadata.vulnerabilities block")
    critical = int(vulns.get("critical", 0))
    high = int(vulns.get("high", 0))
    if critical < 0 or high < 0:
        raise ValueError("negative vulnerability count")
    return critical, high


class AuditRunner:
    """Counts critical/high advisories in the resolved dependency tree.

    A failed audit most often means there is no manifest or lockfile to audit,
    so it degrades to zero counts instead of a penalty.
    """

    def __init__(self, *, logger: LoggerPort, timeout: float = 120.0) -> None:
        self._logger = logger
        self._timeout = timeout

    def run(self, workdir: Path) -> AuditReport:
        try:
            run = run_tool(AUDIT_CMD, cwd=workdir, timeout=self._timeout)
        except ToolExecutionError as e:
            return AuditReport.zeroed(str(e))

        # npm audit exits non-zero whenever advisories exist; only the body matters.
        try:
            critical, high = parse_audit_report(run.stdout)
        except (ValueError, TypeError, AttributeError) as e:
            return AuditReport.zeroed(f"unreadable audit output: {e}")

        self._logger.info("audit_finished", type="audit_finished", critical=critical, high=high)
        return AuditReport(critical=critical, high=high)
