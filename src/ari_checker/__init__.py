from .app.main import analyze, validate, logs

__all__ = [
    "analyze",
    "validate",
    "logs",
]

# stdlib logging defaults: attach NullHandler to prevent 'No handler' warnings
import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
