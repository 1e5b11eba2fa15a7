"""Row representations accepted by the store.

Any object satisfying the ``Row`` protocol can be stored. Three adapters are
provided for the representations callers usually hold:

    - FixedRow: immutable, tuple-backed
    - OwnedRow: list-backed and growable until handed to a store
    - SharedRow: a handle onto storage that other handles may share

Rows are plain sequences: they compare equal to any other row, list or tuple
holding the same values in the same order.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from typing import Any, Iterable, Iterator

from shortcut.ports.inbound.store import Row


class _SequenceRow(Sequence):
    """Shared behaviour for the row adapters."""

    __slots__ = ()

    @abstractmethod
    def _values(self) -> Sequence[Any]:
        """Return the backing storage of this row."""

    def __getitem__(self, column: int) -> Any:  # type: ignore[override]
        values = self._values()
        if isinstance(column, slice):
            return tuple(values[column])
        if column < 0 or column >= len(values):
            raise IndexError(f"column {column} out of range for row of {len(values)} columns")
        return values[column]

    def __len__(self) -> int:
        return len(self._values())

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values())

    def columns(self) -> int:
        """Return the number of columns in this row."""
        return len(self._values())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (_SequenceRow, list, tuple)):
            return tuple(self) == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._values()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._values())!r})"


class FixedRow(_SequenceRow):
    """An immutable row backed by a tuple."""

    __slots__ = ("_data",)

    def __init__(self, values: Iterable[Any]) -> None:
        self._data = tuple(values)

    def _values(self) -> tuple[Any, ...]:
        return self._data


class OwnedRow(_SequenceRow):
    """A growable row backed by a list.

    Values can be appended while the row is being assembled. Once the row
    has been inserted into a store it must not be modified: indices key on
    the values seen at insert time and would go stale.
    """

    __slots__ = ("_data",)

    def __init__(self, values: Iterable[Any] = ()) -> None:
        self._data = list(values)

    def _values(self) -> list[Any]:
        return self._data

    def append(self, value: Any) -> None:
        self._data.append(value)

    def extend(self, values: Iterable[Any]) -> None:
        self._data.extend(values)

    __hash__ = None  # type: ignore[assignment]


class SharedRow(_SequenceRow):
    """A handle onto row storage that several holders can share.

    ``share()`` hands out another handle over the same underlying tuple, so
    the values are stored once no matter how many handles exist.
    """

    __slots__ = ("_storage",)

    def __init__(self, values: Iterable[Any] | SharedRow) -> None:
        if isinstance(values, SharedRow):
            self._storage: tuple[Any, ...] = values._storage
        else:
            self._storage = tuple(values)

    def _values(self) -> tuple[Any, ...]:
        return self._storage

    def share(self) -> SharedRow:
        """Return a new handle over this row's storage."""
        return SharedRow(self)

    def shares_storage_with(self, other: SharedRow) -> bool:
        return self._storage is other._storage


def as_row(obj: Any) -> Row:
    """Coerce a caller-supplied object into a row.

    Tuples become ``FixedRow``, lists become ``OwnedRow``, existing row
    adapters are returned unchanged and any other non-string sequence is
    copied into a ``FixedRow``.

    Raises:
        TypeError: If ``obj`` is not a sequence, or is a string.
    """
    if isinstance(obj, _SequenceRow):
        return obj
    if isinstance(obj, tuple):
        return FixedRow(obj)
    if isinstance(obj, list):
        return OwnedRow(obj)
    if isinstance(obj, (str, bytes, bytearray)):
        raise TypeError(f"{type(obj).__name__} is not a valid row")
    if isinstance(obj, Row):
        return obj
    if isinstance(obj, Sequence):
        return FixedRow(obj)
    raise TypeError(f"{type(obj).__name__} is not a valid row")
