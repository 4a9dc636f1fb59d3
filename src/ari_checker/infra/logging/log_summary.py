from __future__ import annotations

import datetime as _dt
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class RunSummary:
    target: str
    is_valid: bool | None = None
    message: str = ""
    ari_score: int | None = None
    status: str = ""
    metrics: dict[str, Any] = field(default_factory=dict)
    has_explanation: bool = False
    last_stage: str = ""
    degraded: list[str] = field(default_factory=list)
    run_date: str = ""
    done: bool = False


def _iter_records(fp: Path):
    for line in fp.read_text(encoding="utf-8").splitlines():
        try:
            obj = json.loads(line)
        except json.JSONDecodeError:
            continue
        if isinstance(obj, dict):
            yield obj


def parse_run_log(fp: Path) -> RunSummary:
    """Fold one JSONL run log into a summary.

    A file may hold several runs for the same target; the last run wins.
    """
    summary = RunSummary(target=fp.stem.replace("__", "/", 1))

    for obj in _iter_records(fp):
        msg = obj.get("message")

        if msg == "run_started":
            target = obj.get("target")
            summary = RunSummary(target=target if isinstance(target, str) else summary.target)
            ts = obj.get("timestamp")
            if isinstance(ts, str):
                summary.run_date = ts.replace("T", " ")

        elif msg == "stage":
            stage = obj.get("stage")
            if isinstance(stage, str):
                summary.last_stage = stage

        elif obj.get("type") == "analyzer_degraded":
            reason = obj.get("reason")
            summary.degraded.append(f"{str(msg).removesuffix('_degraded')}: {reason}")

        elif msg == "final_result":
            summary.done = True
            res = obj.get("result") or {}
            if not isinstance(res, dict):
                continue
            is_valid = res.get("is_valid")
            if isinstance(is_valid, bool):
                summary.is_valid = is_valid
            message = res.get("message")
            if isinstance(message, str):
                summary.message = message
            score = res.get("ari_score")
            if isinstance(score, int):
                summary.ari_score = score
            status = res.get("status")
            if isinstance(status, str):
                summary.status = status
            metrics = res.get("metrics")
            if isinstance(metrics, dict):
                summary.metrics = metrics
            summary.has_explanation = isinstance(res.get("explanation"), dict)

    if not summary.run_date:
        ts = fp.stat().st_mtime
        summary.run_date = _dt.datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M:%S")
    return summary


def summarize_logs(logs_dir: Path) -> dict[str, RunSummary]:
    try:
        files = sorted(p for p in logs_dir.glob("*.jsonl") if p.is_file())
    except FileNotFoundError:
        files = []

    items = [parse_run_log(fp) for fp in files]
    items.sort(key=lambda s: s.run_date or "", reverse=True)
    return {s.target: s for s in items}


def _outcome(s: RunSummary) -> str:
    if not s.done:
        return "incomplete"
    return "accepted" if s.is_valid else "rejected"


def format_summary_table(summaries: dict[str, RunSummary], verbose: bool = False) -> list[str]:
    if not summaries:
        return ["No logs found."]

    rows: list[tuple[str, str, str, str, str, str]] = []
    for target, s in summaries.items():
        rows.append((
            target,
            _outcome(s),
            "" if s.ari_score is None else str(s.ari_score),
            s.status,
            s.run_date,
            "; ".join(s.degraded) if verbose else "",
        ))

    target_w = max(6, max(len(r[0]) for r in rows))
    outcome_w = max(7, max(len(r[1]) for r in rows))
    score_w = 3
    status_w = max(6, max(len(r[3]) for r in rows))

    header_parts = [
        'Target'.ljust(target_w),
        'Outcome'.ljust(outcome_w),
        'ARI'.rjust(score_w),
        'Status'.ljust(status_w),
        'RunDate',
    ]
    if verbose:
        header_parts.append('Degraded')

    lines: list[str] = ["  ".join(header_parts)]
    for target, outcome, score, status, run_date, degraded in rows:
        parts = [
            target.ljust(target_w),
            outcome.ljust(outcome_w),
            score.rjust(score_w),
            status.ljust(status_w),
            run_date,
        ]
        if verbose and degraded:
            parts.append(degraded)
        lines.append("  ".join(parts).rstrip())
    return lines


def format_single_summary(s: RunSummary) -> list[str]:
    """Render a concise multi-line summary for a single run."""
    lines = [f"Target:  {s.target}", f"Outcome: {_outcome(s)}"]
    if s.run_date:
        lines.append(f"RunDate: {s.run_date}")
    if s.message:
        lines.append(f"Message: {s.message}")
    if s.ari_score is not None:
        lines.append(f"ARI:     {s.ari_score} ({s.status})")
    if s.metrics:
        lines.append("Metrics:")
        for key, value in s.metrics.items():
            lines.append(f"  {key}: {value}")
    if s.degraded:
        lines.append("Degraded:")
        lines.extend(f"  {d}" for d in s.degraded)
    if not s.done and s.last_stage:
        lines.append(f"Last stage: {s.last_stage}")
    if s.done and s.is_valid:
        lines.append(f"Explanation: {'yes' if s.has_explanation else 'unavailable'}")
    return lines
