from __future__ import annotations

from .json_extractor import JsonExtractor
from .explanation_service import ExplanationService
from .analysis_orchestrator import AnalysisOrchestrator

__all__ = [
    "JsonExtractor",
    "ExplanationService",
    "AnalysisOrchestrator",
]
