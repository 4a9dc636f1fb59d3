from __future__ import annotations

import logging
from pathlib import Path

from dependency_injector.resources import Resource

from .handlers import build_json_file_handler, build_human_console_handler, run_log_path


class AnalysisLogger(Resource):
    """Structured logger for the readiness pipeline.

    Writes a JSONL file per analyzed target and optionally mirrors records to
    the console. Structured fields are passed as keyword arguments.
    """

    def init(
        self,
        *,
        target: str | None = None,
        logs_dir: Path,
        logger_name: str = "ari_checker",
        console_output: bool = False,
        level: str = "INFO",
    ) -> "AnalysisLogger":
        """Configure handlers for one run.

        Args:
            target: ``owner/repo`` slug; when given, a JSONL file handler is attached
            logs_dir: Directory for run logs
            logger_name: Logger name
            console_output: Whether to enable console output
            level: Logging level (DEBUG, INFO, WARNING, ERROR)

        Returns:
            Self for dependency_injector Resource pattern
        """
        numeric_level = logging.getLevelName(level.upper())
        if not isinstance(numeric_level, int):
            numeric_level = logging.INFO

        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(numeric_level)
        self._logger.propagate = False

        self._logger.handlers.clear()
        self._handlers: list[logging.Handler] = []
        self.log_file: Path | None = None

        if target:
            self.log_file = run_log_path(logs_dir, target)
            file_handler = build_json_file_handler(self.log_file, level=numeric_level)
            self._logger.addHandler(file_handler)
            self._handlers.append(file_handler)

        if console_output:
            console_handler = build_human_console_handler(level=numeric_level)
            self._logger.addHandler(console_handler)
            self._handlers.append(console_handler)

        return self

    def shutdown(self, resource: "AnalysisLogger") -> None:
        """Flush and close handlers so log files are released."""
        for handler in self._handlers:
            handler.flush()
            handler.close()
        self._logger.handlers.clear()

    def debug(self, message: str, **kwargs) -> None:
        self._logger.debug(message, extra=kwargs or None)

    def info(self, message: str, **kwargs) -> None:
        self._logger.info(message, extra=kwargs or None)

    def warning(self, message: str, **kwargs) -> None:
        self._logger.warning(message, extra=kwargs or None)

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        self._logger.error(message, extra=kwargs or None, exc_info=exc_info)

    def exception(self, message: str, **kwargs) -> None:
        self._logger.exception(message, extra=kwargs or None)
