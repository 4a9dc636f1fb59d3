from __future__ import annotations

from .installer import DependencyInstaller
from .lint_runner import LintRunner
from .audit_runner import AuditRunner

__all__ = [
    "DependencyInstaller",
    "LintRunner",
    "AuditRunner",
]
