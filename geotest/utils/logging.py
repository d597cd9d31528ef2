"""Structured logging utilities."""
import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Dict, Any, Optional


def setup_logging(level: str = "WARNING"):
    """Setup structured JSON logging on stderr."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format='%(message)s',
        handlers=[logging.StreamHandler()]
    )


def log_structured(level: str, message: str, **kwargs):
    """
    Log structured JSON message.
    
    Args:
        level: Log level (info, warning, error, etc.)
        message: Log message
        **kwargs: Additional structured fields
    """
    log_entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level.upper(),
        "message": message,
        **kwargs
    }
    
    logger = logging.getLogger("geotest")
    getattr(logger, level.lower(), logger.info)(json.dumps(log_entry, ensure_ascii=False, default=str))


def log_error(error: Exception, context: Optional[Dict[str, Any]] = None):
    """
    Log a caught exception with its context as a structured error entry.
    
    Args:
        error: The exception that was caught
        context: Extra fields describing where it happened
    """
    log_structured(
        "error",
        str(error) or type(error).__name__,
        error_type=type(error).__name__,
        traceback=traceback.format_exc(),
        **(context or {})
    )
