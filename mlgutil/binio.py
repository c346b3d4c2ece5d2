"""Little-endian binary streams for saving and loading objects."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Mapping, TypeVar

from mlgutil.base import BlockIndexPair, SVpair

T = TypeVar("T")

_INT = struct.Struct("<i")
_DOUBLE = struct.Struct("<d")
_BOOL = struct.Struct("<?")
_MAX_NAME = 254
_ENCODING = "latin-1"


class FormatError(ValueError):
    """Raised when a binary file does not hold what was expected."""


class BinaryReader:
    """Reads values written by BinaryWriter."""

    def __init__(self, filename) -> None:
        self._file = open(filename, "rb")

    def _read(self, n: int) -> bytes:
        data = self._file.read(n)
        if len(data) != n:
            raise EOFError(f"expected {n} bytes, got {len(data)}")
        return data

    def _unpack(self, fmt: str) -> tuple:
        s = struct.Struct("<" + fmt)
        return s.unpack(self._read(s.size))

    def _read_count(self) -> int:
        n = self.read_int()
        if n < 0:
            raise FormatError(f"negative element count {n}")
        return n

    def read_int(self) -> int:
        return _INT.unpack(self._read(_INT.size))[0]

    def read_double(self) -> float:
        return _DOUBLE.unpack(self._read(_DOUBLE.size))[0]

    def read_bool(self) -> bool:
        return _BOOL.unpack(self._read(_BOOL.size))[0]

    def read_block_index_pair(self) -> BlockIndexPair:
        block, index = self._unpack("ii")
        return BlockIndexPair(block, index)

    def read_svpair(self) -> SVpair:
        first = self.read_int()
        return SVpair(first, self.read_double())

    def read_vector(self, read_item: Callable[[], T]) -> list[T]:
        """Read a count, then that many items using read_item."""
        return [read_item() for _ in range(self._read_count())]

    def read_list(self, read_item: Callable[[], T]) -> list[T]:
        return self.read_vector(read_item)

    def read_unordered_map(self, key_format: str, value_format: str) -> dict:
        """Read a count, then that many key/value pairs of the given struct formats."""
        result = {}
        for _ in range(self._read_count()):
            (key,) = self._unpack(key_format)
            (value,) = self._unpack(value_format)
            result[key] = value
        return result

    def read_array(self, fmt: str) -> list:
        """Read a count, then that many packed values of one struct format."""
        n = self._read_count()
        return list(self._unpack(f"{n}{fmt}"))

    def unserialize(self, cls: Callable[["BinaryReader"], T]) -> T:
        """Build one object by calling cls with this reader."""
        return cls(self)

    def unserialize_vector(self, cls: Callable[["BinaryReader"], T]) -> list[T]:
        return [cls(self) for _ in range(self._read_count())]

    def _read_name(self, consume: bool) -> str:
        pos = self._file.tell()
        data = self._file.read(_MAX_NAME + 1)
        end = data.find(b"\0")
        if end == -1 or end > _MAX_NAME:
            name = data[:_MAX_NAME]
            used = len(name)
        else:
            name = data[:end]
            used = end + 1
        self._file.seek(pos + used if consume else pos)
        return name.decode(_ENCODING)

    def peek(self) -> str:
        """Return the name tag at the current position without consuming it."""
        return self._read_name(consume=False)

    def checkname(self, name: str) -> bool:
        return self.peek() == name

    def check(self, name: str, version: int) -> None:
        """Consume a name tag and version, raising FormatError if they differ."""
        found = self._read_name(consume=True)
        if found != name:
            raise FormatError(f"{name} expected, {found} found.")
        readver = self.read_int()
        if readver != version:
            raise FormatError(f"version {version} expected, {readver} found.")

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "BinaryReader":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class BinaryWriter:
    """Writes values in the layout BinaryReader expects."""

    def __init__(self, filename) -> None:
        self._file = open(filename, "wb")

    def write_int(self, x: int) -> None:
        self._file.write(_INT.pack(x))

    def write_double(self, x: float) -> None:
        self._file.write(_DOUBLE.pack(x))

    def write_bool(self, x: bool) -> None:
        self._file.write(_BOOL.pack(bool(x)))

    def write_block_index_pair(self, x: BlockIndexPair) -> None:
        self.write_int(x.block)
        self.write_int(x.index)

    def write_svpair(self, x: SVpair) -> None:
        self.write_int(x.first)
        self.write_double(x.second)

    def write_vector(self, items: Iterable[T], write_item: Callable[[T], Any]) -> None:
        """Write a count, then each item using write_item."""
        items = list(items)
        self.write_int(len(items))
        for item in items:
            write_item(item)

    def write_list(self, items: Iterable[T], write_item: Callable[[T], Any]) -> None:
        self.write_vector(items, write_item)

    def write_unordered_map(self, mapping: Mapping, key_format: str, value_format: str) -> None:
        self.write_int(len(mapping))
        for key, value in mapping.items():
            self._file.write(struct.pack("<" + key_format, key))
            self._file.write(struct.pack("<" + value_format, value))

    def write_array(self, values: Iterable, fmt: str) -> None:
        values = list(values)
        self.write_int(len(values))
        self._file.write(struct.pack(f"<{len(values)}{fmt}", *values))

    def serialize(self, obj: "Serializable") -> None:
        obj.serialize(self)

    def serialize_vector(self, objs: Iterable["Serializable"]) -> None:
        objs = list(objs)
        self.write_int(len(objs))
        for obj in objs:
            obj.serialize(self)

    def tag(self, name: str, version: int) -> None:
        """Write a NUL-terminated name followed by a version number."""
        self._file.write(name.encode(_ENCODING) + b"\0")
        self.write_int(version)

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "BinaryWriter":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class Serializable(ABC):
    """An object that can write itself to a BinaryWriter."""

    @abstractmethod
    def serialize(self, writer: BinaryWriter) -> None:
        """Write this object to writer."""

    def save(self, filename) -> None:
        """Write this object to a new file."""
        with BinaryWriter(filename) as writer:
            self.serialize(writer)