"""Error Hierarchy: typed, categorized exceptions for all Secure Notes failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400-level) reject the whole invocation before any write lands
    - Cipher errors never escape the operation surface; they become marker strings
    - Infrastructure errors (500-level) roll back the invocation
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with SecureNotesError base: one FastAPI handler catches all
    - CipherError carries its user-facing marker so the surface converts without a lookup table
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    PERMISSION = "permission"
    CIPHER = "cipher"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    caller: str | None = None
    function: str | None = None
    debug_info: dict[str, Any] | None = None


class SecureNotesError(Exception):
    """Base exception for all Secure Notes errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "caller": self.context.caller,
                    "function": self.context.function,
                },
            }
        }


# ─── Validation Errors (400-level) ──────────────────────────────

class InvalidAddressError(SecureNotesError):
    """Account identifier is not 0x + 40 hex digits."""
    def __init__(self, value: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid address format: {value[:66]!r}",
            "INVALID_ADDRESS", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.value = value


class InvalidArgumentError(SecureNotesError):
    """Call argument does not decode to its declared ABI type."""
    def __init__(self, message: str, argument: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.argument = argument


class UnknownFunctionError(SecureNotesError):
    """No operation is bound to the requested function signature."""
    def __init__(self, signature: str, context: ErrorContext | None = None):
        super().__init__(
            f"Function '{signature}' does not exist.",
            "UNKNOWN_FUNCTION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.signature = signature


# ─── Cipher Errors (returned as values) ─────────────────────────

class CipherError(SecureNotesError):
    """Decryption refused or failed. `marker` is what callers see."""
    marker = "Error: Decryption failed"

    def __init__(self, message: str, code: str, category: ErrorCategory):
        super().__init__(
            message, code, category, ErrorSeverity.WARNING, None, 400,
        )


class InvalidCiphertextFormatError(CipherError):
    """Ciphertext shorter than the owner prefix."""
    marker = "Error: Invalid data format"

    def __init__(self, length: int):
        super().__init__(
            f"Ciphertext of {length} bytes is shorter than the owner prefix",
            "INVALID_CIPHERTEXT_FORMAT", ErrorCategory.CIPHER,
        )


class DecryptPermissionError(CipherError):
    """Ciphertext prefix names a different owner than the caller."""
    marker = "Error: You don't have permission to decrypt this note"

    def __init__(self):
        super().__init__(
            "Ciphertext owner does not match caller",
            "DECRYPT_PERMISSION_DENIED", ErrorCategory.PERMISSION,
        )


class DecryptionFailedError(CipherError):
    """Decrypted bytes are not valid UTF-8."""
    marker = "Error: Decryption failed"

    def __init__(self):
        super().__init__(
            "Decrypted bytes are not valid UTF-8",
            "DECRYPTION_FAILED", ErrorCategory.CIPHER,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(SecureNotesError):
    """Persistent store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
