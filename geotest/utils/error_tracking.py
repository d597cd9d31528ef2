"""Error tracking for failures in external transliteration collaborators."""
import os
import logging
from typing import Optional

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration


def setup_error_tracking(
    dsn: Optional[str] = None,
    environment: Optional[str] = None,
    release: Optional[str] = None,
) -> bool:
    """
    Setup Sentry error tracking.
    
    Args:
        dsn: Sentry DSN (if None, will try to get from SENTRY_DSN env var)
        environment: Environment name (development, staging, production)
        release: Release version
    
    Returns:
        True if Sentry was initialized, False otherwise
    """
    dsn = dsn or os.getenv("SENTRY_DSN")
    if not dsn:
        logging.getLogger("geotest").debug("Sentry DSN not provided. Error tracking disabled.")
        return False
    
    environment = environment or os.getenv("ENVIRONMENT", "development")
    release = release or os.getenv("RELEASE", "unknown")
    
    try:
        sentry_sdk.init(
            dsn=dsn,
            environment=environment,
            release=release,
            integrations=[
                LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
            ],
            attach_stacktrace=True,
            send_default_pii=False,
        )
    except Exception as e:
        logging.getLogger("geotest").error(f"Failed to initialize Sentry: {e}")
        return False
    
    logging.getLogger("geotest").info(f"Sentry error tracking initialized for environment: {environment}")
    return True


def capture_exception(error: Exception, context: Optional[dict] = None) -> bool:
    """Capture exception and send to Sentry if a client is configured."""
    if not sentry_sdk.is_initialized():
        return False
    
    with sentry_sdk.new_scope() as scope:
        if context:
            for key, value in context.items():
                scope.set_context(key, {"value": str(value)})
        sentry_sdk.capture_exception(error)
    return True
