import json
import logging
import traceback
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Dict, Optional, Any

from utils.logger import get_logger


logger = get_logger(__name__)


# Custom Exception Classes
class StorefrontError(Exception):
    """Base exception for all storefront errors"""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class ValidationError(StorefrontError):
    """Data validation failures"""

    pass


class InvalidMoneyError(ValidationError):
    """Money amount that cannot be parsed as a finite decimal"""

    pass


class ConfigurationError(StorefrontError):
    """Configuration-related errors"""

    pass


class NetworkError(StorefrontError):
    """Network and connectivity issues"""

    pass


class StorefrontAPIError(NetworkError):
    """Failed call to the Storefront GraphQL API"""

    def __init__(
        self,
        message: str,
        status_code: int = 502,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.status_code = status_code


class ProductNotFoundError(StorefrontError):
    """Requested product handle does not exist in the catalog"""

    def __init__(self, handle: str):
        super().__init__(f"Product not found: {handle}", {"handle": handle})
        self.handle = handle


@dataclass
class ErrorContext:
    """Captures error details for a failed storefront operation"""

    operation: Optional[str] = None
    handle: Optional[str] = None
    timestamp: Optional[datetime] = None
    additional_data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def log_error(
    error: Exception,
    context: Optional[ErrorContext] = None,
    level: int = logging.ERROR,
    log: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """Log error with structured context and return the logged payload"""
    payload = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        "context": context.to_dict() if context else {},
    }
    if isinstance(error, StorefrontError) and error.context:
        payload["error_context"] = error.context
    if level >= logging.ERROR:
        payload["stack_trace"] = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )

    (log or logger).log(level, json.dumps(payload, default=str))
    return payload
