"""
callstats/aggregators/call_aggregator.py
Per-customer call aggregation.

Every metric is one grouping pass over the records:
  key_selector    → which customer the record is credited to
  value_selector  → what the record contributes
  reducer         → how contributions combine:
                      'sum'     : add values
                      'count'   : number of records (value ignored)
                      'distinct': number of unique values

Customers with no matching record never appear in the result.
"""

from collections import defaultdict
from typing import Callable, Dict, Iterable, Set

from callstats.models.record import CallRecord

KeySelector   = Callable[[CallRecord], int]
ValueSelector = Callable[[CallRecord], int]

REDUCERS = ('sum', 'count', 'distinct')


# ── SELECTORS ────────────────────────────────────────────────

def by_caller(record: CallRecord) -> int:
    return record.caller_id

def by_receiver(record: CallRecord) -> int:
    return record.receiver_id

def duration(record: CallRecord) -> int:
    return record.duration_seconds


# ── AGGREGATION ENGINE ───────────────────────────────────────

def aggregate(
    records:        Iterable[CallRecord],
    key_selector:   KeySelector,
    value_selector: ValueSelector = duration,
    reducer:        str           = 'sum',
) -> Dict[int, int]:
    """
    Group records by key_selector and reduce each group to one integer.

    Args:
        records:        Any iterable of CallRecord (RecordStore, list, ...).
        key_selector:   Maps a record to the customer id it is grouped under.
        value_selector: Maps a record to the value being reduced.
        reducer:        'sum', 'count' or 'distinct'.

    Returns:
        Dict customer_id → metric.
    """
    if reducer not in REDUCERS:
        raise ValueError(f"Unknown reducer {reducer!r}: expected one of {REDUCERS}")

    if reducer == 'distinct':
        peers: Dict[int, Set[int]] = defaultdict(set)
        for record in records:
            peers[key_selector(record)].add(value_selector(record))
        return {key: len(seen) for key, seen in peers.items()}

    totals: Dict[int, int] = defaultdict(int)
    if reducer == 'count':
        for record in records:
            totals[key_selector(record)] += 1
    else:
        for record in records:
            totals[key_selector(record)] += value_selector(record)
    return dict(totals)


# ── NAMED METRICS ────────────────────────────────────────────

def total_outgoing_duration(records: Iterable[CallRecord]) -> Dict[int, int]:
    """Seconds spent on calls each customer placed."""
    return aggregate(records, by_caller, duration, 'sum')


def total_incoming_duration(records: Iterable[CallRecord]) -> Dict[int, int]:
    """Seconds spent on calls each customer received."""
    return aggregate(records, by_receiver, duration, 'sum')


def distinct_receivers_per_caller(records: Iterable[CallRecord]) -> Dict[int, int]:
    """How many different customers each caller dialled."""
    return aggregate(records, by_caller, by_receiver, 'distinct')


def distinct_callers_per_receiver(records: Iterable[CallRecord]) -> Dict[int, int]:
    """How many different customers called each receiver."""
    return aggregate(records, by_receiver, by_caller, 'distinct')


def outgoing_call_count(records: Iterable[CallRecord]) -> Dict[int, int]:
    return aggregate(records, by_caller, reducer='count')


def incoming_call_count(records: Iterable[CallRecord]) -> Dict[int, int]:
    return aggregate(records, by_receiver, reducer='count')


AGGREGATIONS: Dict[str, Callable[[Iterable[CallRecord]], Dict[int, int]]] = {
    'total_outgoing_duration':       total_outgoing_duration,
    'total_incoming_duration':       total_incoming_duration,
    'distinct_receivers_per_caller': distinct_receivers_per_caller,
    'distinct_callers_per_receiver': distinct_callers_per_receiver,
    'outgoing_call_count':           outgoing_call_count,
    'incoming_call_count':           incoming_call_count,
}
