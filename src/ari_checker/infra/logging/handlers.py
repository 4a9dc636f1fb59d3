from __future__ import annotations

import logging
from logging import Handler
from pathlib import Path

from .formatters import JSONFormatter, HumanReadableFormatter


def run_log_path(logs_dir: Path, target: str) -> Path:
    """Log file for an ``owner/repo`` target: ``<logs_dir>/owner__repo.jsonl``."""
    return logs_dir / f"{target.replace('/', '__')}.jsonl"


def build_json_file_handler(path: Path, level: int = logging.INFO) -> Handler:
    """Create an appending file handler writing one JSON object per line."""
    path.parent.mkdir(parents=True, exist_ok=True)
    h = logging.FileHandler(path, encoding="utf-8", mode="a")
    h.setLevel(level)
    h.setFormatter(JSONFormatter())
    return h


def build_human_console_handler(level: int = logging.INFO) -> Handler:
    """Create a stderr handler with the human-readable formatter."""
    h = logging.StreamHandler()
    h.setLevel(level)
    h.setFormatter(HumanReadableFormatter())
    return h
