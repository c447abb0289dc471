"""
Keyed archive decoding.

MoneyWell stores the array-valued parts of a recurrence rule as NSKeyedArchiver
blobs: a property list whose top level is a mapping holding an `$objects`
array. Entries of `$objects` are boxed primitives, nested mappings, and UID
references pointing back into `$objects`.

The decoded graph is exposed as a closed family of immutable value types
(ArchiveInteger, ArchiveString, ArchiveArray, ArchiveMap, ArchiveReference and
a handful of rarer primitives) so extractors can dispatch on type instead of
poking at raw plistlib output.
"""

import logging
import plistlib
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Set, Tuple, Union

from moneywell.core.exceptions import ArchiveDecodeError

logger = logging.getLogger(__name__)

OBJECTS_KEY = "$objects"
CLASS_KEY = "$class"


class ArchiveValue:
    """Base class of every decoded archive node."""

    __slots__ = ()


@dataclass(frozen=True)
class ArchiveInteger(ArchiveValue):
    """Boxed integer; non-negative values are the unsigned encoding."""

    value: int

    @property
    def is_unsigned(self) -> bool:
        return self.value >= 0


@dataclass(frozen=True)
class ArchiveReal(ArchiveValue):
    value: float


@dataclass(frozen=True)
class ArchiveBoolean(ArchiveValue):
    value: bool


@dataclass(frozen=True)
class ArchiveString(ArchiveValue):
    value: str


@dataclass(frozen=True)
class ArchiveData(ArchiveValue):
    value: bytes


@dataclass(frozen=True)
class ArchiveDate(ArchiveValue):
    value: datetime


@dataclass(frozen=True)
class ArchiveReference(ArchiveValue):
    """UID handle: an index into the archive's `$objects` array."""

    uid: int


@dataclass(frozen=True)
class ArchiveArray(ArchiveValue):
    items: Tuple[ArchiveValue, ...] = ()

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class ArchiveMap(ArchiveValue):
    entries: Dict[str, ArchiveValue] = field(default_factory=dict)

    def get(self, key: str, default: Optional[ArchiveValue] = None) -> Optional[ArchiveValue]:
        return self.entries.get(key, default)

    def __contains__(self, key: str) -> bool:
        return key in self.entries

    @property
    def class_reference(self) -> Optional[ArchiveReference]:
        """The `$class` handle of an archived object, if it has one."""
        cls = self.entries.get(CLASS_KEY)
        if isinstance(cls, ArchiveReference):
            return cls
        return None

    @property
    def objects(self) -> ArchiveArray:
        """
        The top-level `$objects` array.

        Raises:
            ArchiveDecodeError: If this map is not an archive root
        """
        objects = self.entries.get(OBJECTS_KEY)
        if objects is None:
            raise ArchiveDecodeError("Failed to decode plist as map, accessing $objects")
        if not isinstance(objects, ArchiveArray):
            raise ArchiveDecodeError("Failed to decode plist as map, accessing $objects as array")
        return objects


def _to_archive_value(obj: Any, converting: Optional[Set[int]] = None) -> ArchiveValue:
    """Convert one plistlib node (recursively) into an ArchiveValue."""
    if converting is None:
        converting = set()

    # bool is a subclass of int, so it has to be matched first
    if isinstance(obj, bool):
        return ArchiveBoolean(obj)
    if isinstance(obj, int):
        return ArchiveInteger(obj)
    if isinstance(obj, float):
        return ArchiveReal(obj)
    if isinstance(obj, str):
        return ArchiveString(obj)
    if isinstance(obj, (bytes, bytearray)):
        return ArchiveData(bytes(obj))
    if isinstance(obj, datetime):
        return ArchiveDate(obj)
    if isinstance(obj, plistlib.UID):
        return ArchiveReference(obj.data)
    if isinstance(obj, (list, tuple, dict)):
        # plistlib shares one container object between repeated references,
        # so a crafted binary plist can contain itself
        if id(obj) in converting:
            raise ArchiveDecodeError("Failed to decode plist: cyclic reference")
        converting.add(id(obj))
        try:
            return _to_archive_container(obj, converting)
        finally:
            converting.discard(id(obj))

    raise ArchiveDecodeError(f"Unsupported archive value of type {type(obj).__name__}")


def _to_archive_container(obj, converting: Set[int]) -> ArchiveValue:
    if isinstance(obj, dict):
        entries = {}
        for key, value in obj.items():
            if not isinstance(key, str):
                raise ArchiveDecodeError(f"Unsupported archive map key: {key!r}")
            entries[key] = _to_archive_value(value, converting)
        return ArchiveMap(entries)

    return ArchiveArray(tuple(_to_archive_value(item, converting) for item in obj))


def decode_archive(blob: Optional[Union[bytes, str]]) -> Optional[ArchiveMap]:
    """
    Decode a keyed archive blob.

    Args:
        blob: Binary or XML property list bytes (text is UTF-8 encoded first),
            or None when the column is NULL

    Returns:
        Root ArchiveMap whose `$objects` entry is an ArchiveArray, or None
        when no blob was supplied

    Raises:
        ArchiveDecodeError: If the blob is not a well-formed keyed archive
    """
    if blob is None:
        return None

    if isinstance(blob, str):
        blob = blob.encode("utf-8")

    try:
        target = plistlib.loads(bytes(blob))
    except Exception as e:
        raise ArchiveDecodeError(f"Failed to decode plist: {e}") from e

    try:
        root = _to_archive_value(target)
    except RecursionError as e:
        raise ArchiveDecodeError("Failed to decode plist: nesting too deep") from e

    if not isinstance(root, ArchiveMap):
        raise ArchiveDecodeError("Failed to decode plist as map")

    # Validates the $objects entry
    objects = root.objects
    logger.debug(f"Decoded keyed archive with {len(objects)} objects")

    return root
