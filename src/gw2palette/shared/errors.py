"""gw2palette Error Handling Module

This module defines the error handling system for the palette mapper,
providing structured error classes with context information.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved

Translation errors (UnmappedPaletteError, UnmappedSkillError) and the
unknown-profession error are DomainErrors; everything raised while talking
to the GW2 API is an InfrastructureError.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for the palette mapper.

    This enum serves as the single source of truth for all error codes
    used throughout the package.
    """

    # Input Errors
    UNKNOWN_PROFESSION = "UNKNOWN_PROFESSION"

    # Network and API Errors
    API_TIMEOUT = "API_TIMEOUT"
    API_REMOTE_ERROR = "API_REMOTE_ERROR"
    API_INVALID_RESPONSE = "API_INVALID_RESPONSE"
    API_TRANSPORT_ERROR = "API_TRANSPORT_ERROR"

    # Translation Errors
    UNMAPPED_PALETTE = "UNMAPPED_PALETTE"
    UNMAPPED_SKILL = "UNMAPPED_SKILL"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Enum members are reduced to their value, None values are dropped.

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if val is None:
            continue
        if isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Enum are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to keep log records serializable.

    Attributes:
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        if self.additional_data is not None:
            object.__setattr__(
                self,
                "additional_data",
                _coerce_primitives(self.additional_data),
            )

    def safe_dict(self) -> dict[str, Any]:
        """Export context as dict for logging.

        The additional_data key is always present (empty dict when unset).
        """
        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = dict(self.additional_data or {})
        return data


class PaletteMapperError(Exception):
    """Base exception class for all gw2palette errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        """Initialize PaletteMapperError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error
        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(PaletteMapperError):
    """Domain-specific errors.

    Raised for bad caller input or for lookups that the fetched
    data cannot answer. No retry can fix these.
    """


class InfrastructureError(PaletteMapperError):
    """Errors raised while interacting with the GW2 API.

    Examples:
    - Request timeouts
    - Non-success HTTP responses
    - Connection failures
    - Unexpected response payloads
    """


class UnknownProfessionError(DomainError):
    """The profession code is not in the known profession table.

    Raised before any network call is attempted.
    """

    def __init__(self, profession: int, operation: str | None = None) -> None:
        self.profession = profession
        super().__init__(
            ErrorCode.UNKNOWN_PROFESSION,
            f"Unknown profession: {profession}",
            ErrorContext(
                operation=operation,
                additional_data={
                    "profession": profession
                    if isinstance(profession, int)
                    else repr(profession),
                },
            ),
        )


class ApiTimeoutError(InfrastructureError):
    """The request did not complete within the configured timeout."""

    def __init__(
        self,
        url: str,
        timeout_ms: float,
        operation: str | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        self.url = url
        self.timeout_ms = timeout_ms
        super().__init__(
            ErrorCode.API_TIMEOUT,
            f"GW2 API request timeout after {timeout_ms:g}ms",
            ErrorContext(
                operation=operation,
                additional_data={"url": url, "timeout_ms": timeout_ms},
            ),
            original_error,
        )


class RemoteApiError(InfrastructureError):
    """The GW2 API answered with a non-success HTTP status."""

    def __init__(
        self,
        url: str,
        status: int,
        status_text: str = "",
        operation: str | None = None,
    ) -> None:
        self.url = url
        self.status = status
        self.status_text = status_text
        super().__init__(
            ErrorCode.API_REMOTE_ERROR,
            f"GW2 API error: {status} {status_text}".rstrip(),
            ErrorContext(
                operation=operation,
                additional_data={
                    "url": url,
                    "status": status,
                    "status_text": status_text,
                },
            ),
        )


class MalformedResponseError(InfrastructureError):
    """The response body does not have the expected shape."""

    def __init__(
        self,
        url: str,
        reason: str,
        operation: str | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        self.url = url
        self.reason = reason
        super().__init__(
            ErrorCode.API_INVALID_RESPONSE,
            f"Invalid API response: {reason}",
            ErrorContext(operation=operation, additional_data={"url": url}),
            original_error,
        )


class TransportError(InfrastructureError):
    """Lower-level network failure (connection refused, reset, DNS, ...)."""

    def __init__(
        self,
        url: str,
        original_error: BaseException,
        operation: str | None = None,
    ) -> None:
        self.url = url
        super().__init__(
            ErrorCode.API_TRANSPORT_ERROR,
            f"GW2 API request failed: {original_error!s}",
            ErrorContext(
                operation=operation,
                additional_data={
                    "url": url,
                    "original_error_type": type(original_error).__name__,
                },
            ),
            original_error,
        )


class UnmappedPaletteError(DomainError):
    """No skill is mapped to the palette index for the profession."""

    def __init__(self, profession: int, palette_index: int) -> None:
        self.profession = profession
        self.palette_index = palette_index
        super().__init__(
            ErrorCode.UNMAPPED_PALETTE,
            f"No skill mapping for palette {palette_index} (Profession {int(profession)})",
            ErrorContext(
                operation="palette_to_skill",
                additional_data={
                    "profession": int(profession),
                    "palette_index": palette_index,
                },
            ),
        )


class UnmappedSkillError(DomainError):
    """No palette index is mapped to the skill id for the profession."""

    def __init__(self, profession: int, skill_id: int) -> None:
        self.profession = profession
        self.skill_id = skill_id
        super().__init__(
            ErrorCode.UNMAPPED_SKILL,
            f"No palette mapping for skill {skill_id} (Profession {int(profession)})",
            ErrorContext(
                operation="skill_to_palette",
                additional_data={
                    "profession": int(profession),
                    "skill_id": skill_id,
                },
            ),
        )


__all__ = [
    "ApiTimeoutError",
    "DomainError",
    "ErrorCode",
    "ErrorContext",
    "InfrastructureError",
    "MalformedResponseError",
    "PaletteMapperError",
    "PrimitiveContextValue",
    "RemoteApiError",
    "TransportError",
    "UnknownProfessionError",
    "UnmappedPaletteError",
    "UnmappedSkillError",
]
