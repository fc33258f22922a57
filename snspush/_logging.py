import hashlib
import logging
from typing import Any

# Create the library logger
logger = logging.getLogger("snspush")

# Add NullHandler to prevent "No handlers could be found" warnings
# if the application doesn't configure logging.
logger.addHandler(logging.NullHandler())


def redact(value: Any) -> str:
    """
    Redacts device tokens and ARNs for logging.
    Hashes the value to allow correlation without revealing the identifier.
    """
    if value is None:
        return "<none>"
    try:
        return hashlib.sha256(str(value).encode("utf-8")).hexdigest()[:8]
    except Exception:
        return "<redaction_failed>"


def error_context(error: BaseException) -> dict[str, Any]:
    """
    Describes an exception for log records without its message.
    AWS error messages routinely embed endpoint ARNs and tokens, so only the
    exception type and the SNS error code are kept.
    """
    return {
        "error_type": type(error).__name__,
        "error_code": getattr(error, "code", None),
    }
