"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class IngestionError(ValidationError):
    """An upload was rejected. Nothing was written."""


class NoFileProvided(IngestionError):
    def __init__(self) -> None:
        super().__init__("No file uploaded")


class EmptySheet(IngestionError):
    def __init__(self) -> None:
        super().__init__("The first sheet of the workbook is empty")


class DecryptionFailed(IngestionError):
    def __init__(self, reason: str = "wrong or missing password") -> None:
        super().__init__(f"Could not decrypt workbook: {reason}")


class WorkbookUnreadable(IngestionError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Could not read workbook, check the file format: {reason}")


class MissingRequiredColumns(IngestionError):
    """Date, item or amount column could not be resolved."""

    def __init__(
        self,
        missing: list[str],
        header_row_index: int,
        headers: tuple[str, ...],
        hints: dict[str, Optional[str]],
        searched: dict[str, tuple[str, ...]],
    ) -> None:
        self.missing = missing
        self.header_row_index = header_row_index
        self.headers = headers
        self.searched = searched
        super().__init__(missing_columns_message(missing, header_row_index, headers, hints, searched))


class NoValidRowsFound(IngestionError):
    def __init__(self) -> None:
        super().__init__("No valid rows found")


class InvalidManualInput(ValidationError):
    """A settlement adjustment was not a number."""

    def __init__(self, field_name: str, value: object) -> None:
        self.field_name = field_name
        super().__init__(f"Invalid value for {field_name}: {value!r} is not a number")


def missing_columns_message(
    missing: list[str],
    header_row_index: int,
    headers: tuple[str, ...],
    hints: dict[str, Optional[str]],
    searched: dict[str, tuple[str, ...]],
) -> str:
    """Return message naming the unresolved columns and the header row that was used."""
    parts = []
    for name in missing:
        parts.append(
            f"{name.capitalize()} (User: {hints.get(name) or '-'}, "
            f"Defaults: {', '.join(searched.get(name, ()))})"
        )
    return (
        f"Missing required columns: {', '.join(parts)}. "
        f"Found headers in row {header_row_index + 1}: {', '.join(headers)}"
    )


def ledger_row_not_found(row_id: int) -> str:
    """Return message for missing ledger row."""
    return f"Ledger row {row_id} not found"


def mapping_not_found(mapping_id: int) -> str:
    """Return message for missing or foreign column mapping."""
    return f"Column mapping {mapping_id} not found"
