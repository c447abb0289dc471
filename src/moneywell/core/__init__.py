"""
Core module - Foundation components shared by the MoneyWell reader.

Provides:
- open_document: Read-only connection to a MoneyWell store
- parse_dateymd: YYYYMMDD integer date parsing
- Exception hierarchy rooted at MoneyWellError
"""

from moneywell.core.database import open_document, resolve_store_path
from moneywell.core.dateymd import parse_dateymd, format_dateymd
from moneywell.core.exceptions import (
    MoneyWellError,
    DatabaseError,
    ArchiveDecodeError,
    DateParseError,
    FieldBuildError,
)

__all__ = [
    "open_document",
    "resolve_store_path",
    "parse_dateymd",
    "format_dateymd",
    "MoneyWellError",
    "DatabaseError",
    "ArchiveDecodeError",
    "DateParseError",
    "FieldBuildError",
]
