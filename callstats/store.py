"""
callstats/store.py
Record Store: the ordered, read-only collection every query runs over.
"""

from pathlib import Path
from typing import Iterable, Iterator, Union

from callstats.models.record import CallRecord
from callstats.parsers.dataset_parser import parse_dataset_file, parse_lines


class RecordStore:
    """
    Immutable snapshot of call records, in insertion order.

    Usage:
        store = RecordStore.from_file(Path("telecom_data.txt"))
        for record in store:
            ...
    """

    __slots__ = ('_records',)

    def __init__(self, records: Iterable[CallRecord] = ()):
        self._records = tuple(records)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "RecordStore":
        return cls(parse_lines(lines))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "RecordStore":
        return cls(parse_dataset_file(path))

    def __iter__(self) -> Iterator[CallRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return RecordStore(self._records[index])
        return self._records[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, RecordStore):
            return NotImplemented
        return self._records == other._records

    def __hash__(self) -> int:
        return hash(self._records)

    def __repr__(self) -> str:
        return f"RecordStore({len(self._records)} records)"
