"""
PDF Studio - Custom Exceptions Module

This module defines custom exception classes for specific error cases
in the PDF Studio editing engine.
"""


class PdfStudioError(Exception):
    """Base exception for all PDF Studio errors.

    All custom exceptions should inherit from this class to allow
    catching any PDF Studio-specific error.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class ValidationError(PdfStudioError):
    """Raised when caller input is rejected before any state changes."""

    def __init__(
        self,
        field: str,
        value: object = None,
        reason: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            field: Name of the field that failed validation
            value: Optional value that failed validation
            reason: Optional reason for the validation failure
        """
        self.field = field
        self.value = value
        self.reason = reason

        msg = f"Validation error for '{field}'"
        if reason:
            msg += f": {reason}"

        details = f"value={value!r}" if value is not None else None
        super().__init__(msg, details=details)


class InvalidRangeError(ValidationError):
    """Raised when a 1-indexed page range does not fit the document."""

    def __init__(self, start: int, end: int, page_count: int) -> None:
        self.start = start
        self.end = end
        self.page_count = page_count
        super().__init__(
            "range",
            value=(start, end),
            reason=f"expected 1 <= from <= to <= {page_count}",
        )


class FileTooLargeError(ValidationError):
    """Raised when an input file exceeds the configured size limit."""

    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        from pdfstudio.utils.format_utils import format_file_size

        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            "file",
            reason=(
                f"file too large ({format_file_size(size_bytes)}), "
                f"max {format_file_size(limit_bytes)}"
            ),
        )


class StateCorruptionError(PdfStudioError):
    """Raised when the page order table breaks its permutation invariant.

    This signals a logic defect rather than bad input. The affected
    session must not be used for further edits.
    """

    def __init__(self, reason: str, order: list | None = None) -> None:
        self.reason = reason
        self.order = list(order) if order is not None else None
        details = f"order={self.order}" if self.order is not None else None
        super().__init__(f"Edit state is corrupted: {reason}", details=details)


class CodecError(PdfStudioError):
    """Raised when pikepdf fails to copy pages or serialize a document."""

    def __init__(self, operation: str, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            operation: Name of the codec operation that failed
            reason: Optional text of the underlying error
        """
        self.operation = operation
        self.reason = reason

        msg = f"PDF codec failed during '{operation}'"
        if reason:
            msg += f": {reason}"

        super().__init__(msg, details=f"operation={operation}")


class SourceUnreadableError(CodecError):
    """Raised when document bytes cannot be opened (malformed or locked)."""


class InsufficientInputsError(PdfStudioError):
    """Raised when merge receives fewer than two documents."""

    def __init__(self, count: int, required: int = 2) -> None:
        self.count = count
        self.required = required
        super().__init__(
            f"At least {required} documents are required, got {count}",
            details=f"count={count}",
        )


class CannotDeleteAllError(PdfStudioError):
    """Raised when a delete would remove every remaining page."""

    def __init__(self, selected: int, total: int) -> None:
        self.selected = selected
        self.total = total
        super().__init__(
            "Cannot delete all pages",
            details=f"selected={selected}, total={total}",
        )


class ContentEditError(PdfStudioError):
    """Raised when a content mutation fails outside the codec."""

    def __init__(self, operation: str, reason: str | None = None) -> None:
        self.operation = operation
        self.reason = reason

        msg = f"Content edit '{operation}' failed"
        if reason:
            msg += f": {reason}"

        super().__init__(msg, details=f"operation={operation}")


# Exception hierarchy summary:
# PdfStudioError (base)
# ├── ValidationError
# │   ├── InvalidRangeError
# │   └── FileTooLargeError
# ├── StateCorruptionError
# ├── CodecError
# │   └── SourceUnreadableError
# ├── InsufficientInputsError
# ├── CannotDeleteAllError
# └── ContentEditError
