"""
Error Response Models

Error bodies returned by the assistant API. Every failure carries a
machine-readable code; assistant failures also carry what is known about
the upstream completion service.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field

from atom_mail.errors import AssistantError, CryptoFailure, RemoteServiceError


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    REMOTE_SERVICE_ERROR = "REMOTE_SERVICE_ERROR"
    ENCODING_ERROR = "ENCODING_ERROR"
    CRYPTO_FAILURE = "CRYPTO_FAILURE"
    ASSISTANT_ERROR = "ASSISTANT_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""
    status: str = Field(
        default="error",
        description="Always 'error'"
    )
    message: str = Field(
        ...,
        description="Human-readable error message"
    )
    error_code: str = Field(
        ...,
        description="An ErrorCode value, or HTTP_<status> for routing errors"
    )
    details: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Error specific context"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="UTC time the error was reported"
    )

    @classmethod
    def for_http_status(cls, status_code: int, detail: Any) -> "ErrorResponse":
        return cls(message=str(detail), error_code=f"HTTP_{status_code}")

    @classmethod
    def for_assistant_error(cls, exc: AssistantError, error_code: ErrorCode) -> "ErrorResponse":
        """
        Describe an assistant failure.

        Decryption failures get a fixed message. Remote failures report the
        completion service's status code when one was received.
        """
        if isinstance(exc, CryptoFailure):
            return cls(message="Encryption failure", error_code=error_code.value)

        details = {"error_type": exc.__class__.__name__}
        if isinstance(exc, RemoteServiceError) and exc.status_code is not None:
            details["upstream_status_code"] = exc.status_code
        return cls(message=str(exc), error_code=error_code.value, details=details)


class FieldError(BaseModel):
    """One failed field of a request body."""
    loc: List[str]
    msg: str
    type: str

    @classmethod
    def from_pydantic(cls, error: Mapping[str, Any]) -> "FieldError":
        return cls(
            loc=[str(part) for part in error["loc"]],
            msg=error["msg"],
            type=error["type"]
        )


class ValidationErrorResponse(ErrorResponse):
    """Error body for a request that does not match the message contract."""
    message: str = "Request validation error"
    error_code: str = ErrorCode.VALIDATION_ERROR.value
    validation_errors: List[FieldError] = Field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: Sequence[Mapping[str, Any]]) -> "ValidationErrorResponse":
        return cls(validation_errors=[FieldError.from_pydantic(error) for error in errors])
