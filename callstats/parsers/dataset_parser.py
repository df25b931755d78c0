"""
callstats/parsers/dataset_parser.py
Reads and writes the plain-text call dataset.

LINE FORMAT:
  <caller_id> <receiver_id> <duration_seconds>
  Space-separated decimal integers, one record per line.

Blank lines are skipped on read. Any other malformed line raises
DataFormatError with its 1-based line number. A bad dataset never
degrades silently into partial analytics.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Union

from callstats.errors import DataFormatError, DatasetIOError
from callstats.models.record import CallRecord

logger = logging.getLogger(__name__)

FIELD_COUNT = 3


def parse_line(line: str, line_number: int = 1) -> CallRecord:
    """Parse one dataset line. Raises DataFormatError on anything malformed."""
    parts = line.split()
    if len(parts) != FIELD_COUNT:
        raise DataFormatError(
            line_number, line,
            f"expected {FIELD_COUNT} fields, got {len(parts)}",
        )

    values = []
    for part in parts:
        # int() would accept '+5' and '1_000'
        if not (part.isascii() and part.isdigit()):
            raise DataFormatError(line_number, line, f"non-numeric field {part!r}")
        values.append(int(part))

    caller_id, receiver_id, duration = values
    if caller_id <= 0 or receiver_id <= 0:
        raise DataFormatError(line_number, line, "customer ids must be positive")
    if duration <= 0:
        raise DataFormatError(line_number, line, "duration must be positive")
    if caller_id == receiver_id:
        raise DataFormatError(line_number, line, "caller and receiver are the same customer")

    return CallRecord(caller_id, receiver_id, duration)


def parse_lines(lines: Iterable[Union[str, bytes]]) -> Iterator[CallRecord]:
    """
    Yield records from dataset lines, skipping blank ones.
    Byte lines are decoded as UTF-8; undecodable bytes are a format error.
    """
    for line_number, line in enumerate(lines, start=1):
        if isinstance(line, bytes):
            line = _decode_line(line, line_number)
        if not line.strip():
            continue
        yield parse_line(line.rstrip('\r\n'), line_number)


def _decode_line(raw: bytes, line_number: int) -> str:
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise DataFormatError(
            line_number, raw.rstrip(b'\r\n').decode('utf-8', errors='replace'),
            f"invalid UTF-8 at byte {e.start}",
        ) from e


def format_record(record: CallRecord) -> str:
    return f"{record.caller_id} {record.receiver_id} {record.duration_seconds}"


def parse_dataset_file(path: Union[str, Path]) -> List[CallRecord]:
    """
    Parse a whole dataset file.
    OSError is re-raised as DatasetIOError; format errors propagate as-is.
    """
    path = Path(path)
    try:
        with path.open('rb') as fh:
            records = list(parse_lines(fh))
    except DataFormatError as e:
        logger.error(f"Malformed record in {path.name}: {e}")
        raise
    except OSError as e:
        logger.error(f"Dataset read error {path}: {e}")
        raise DatasetIOError(path, "Cannot read dataset", e) from e

    logger.info(f"Parsed {len(records)} records from {path.name}")
    return records


def write_dataset_file(path: Union[str, Path], records: Iterable[CallRecord]) -> int:
    """Write records in dataset format. Returns the number of lines written."""
    path  = Path(path)
    count = 0
    try:
        with path.open('w', encoding='utf-8', newline='\n') as fh:
            for record in records:
                fh.write(format_record(record))
                fh.write('\n')
                count += 1
    except OSError as e:
        logger.error(f"Dataset write error {path}: {e}")
        raise DatasetIOError(path, "Cannot write dataset", e) from e

    logger.info(f"Wrote {count} records to {path.name}")
    return count
