"""
Custom exceptions for the MoneyWell reader.

All MoneyWell-specific exceptions inherit from MoneyWellError for easy catching.
"""


class MoneyWellError(Exception):
    """Base exception for all MoneyWell errors."""

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code


class DatabaseError(MoneyWellError):
    """Document open or query errors."""

    def __init__(self, message: str, code: str = "DB_ERROR"):
        super().__init__(message, code)


class ArchiveDecodeError(MoneyWellError):
    """
    Raised when a blob is present but is not a well-formed keyed archive.

    This includes:
    - Bytes that are not a property list at all
    - A top level that is not a mapping
    - A missing or non-array `$objects` entry
    """

    def __init__(self, message: str, code: str = "ARCHIVE_DECODE_ERROR"):
        super().__init__(message, code)


class DateParseError(MoneyWellError):
    """Raised when a YYYYMMDD integer is not a valid calendar date."""

    def __init__(self, value, code: str = "DATE_PARSE_ERROR"):
        super().__init__(f"Failed to parse date {value}", code)
        self.value = value


class FieldBuildError(MoneyWellError):
    """Raised when a single column of a recurrence rule row cannot be decoded."""

    def __init__(self, field: str, cause: Exception = None, primary_key: int = None,
                 code: str = "FIELD_BUILD_ERROR"):
        message = f"Failed to decode {field.replace('_', ' ')}"
        if primary_key is not None:
            message = f"{message} of recurrence rule {primary_key}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, code)
        self.field = field
        self.cause = cause
        self.primary_key = primary_key
