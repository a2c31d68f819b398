"""Error types for go-ipfs downloads."""
from typing import Any, Dict, Optional

from go_ipfs_dep.logging import get_logger

logger = get_logger(__name__)


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
) -> None:
    """Log an error with context."""
    error_info = {
        "error_type": error.__class__.__name__,
        "error_message": str(error),
    }
    if context:
        error_info["context"] = context
    if isinstance(error, GoIpfsDepError):
        error_info["details"] = error.details

    logger.error({"event": "download_error", **error_info})


class GoIpfsDepError(Exception):
    """Base error class for go-ipfs downloads."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ValidationError(GoIpfsDepError):
    """Requested version, platform or architecture is not supported."""
    def __init__(self, field: str, value: str):
        super().__init__(
            f"{field.capitalize()} '{value}' not supported",
            details={"field": field, "value": value},
        )
        self.field = field
        self.value = value


class TransferError(GoIpfsDepError):
    """Download request failed or returned a non-200 status."""
    def __init__(
        self,
        url: str,
        status: Optional[int] = None,
        body: Optional[str] = None,
        reason: Optional[str] = None,
    ):
        if status is not None:
            message = f"{status} - {body}"
        else:
            message = reason or f"Failed to download {url}"
        super().__init__(
            message,
            details={"url": url, "status": status, "body": body, "reason": reason},
        )
        self.url = url
        self.status = status
        self.body = body


class ExtractionError(GoIpfsDepError):
    """Archive could not be decompressed or unpacked."""
    def __init__(self, path: str, archive_format: str, reason: str):
        super().__init__(
            f"Failed to extract {archive_format} archive to {path}: {reason}",
            details={"path": path, "format": archive_format, "reason": reason},
        )
