"""
callstats/models/record.py
Shared value types. The store, aggregators, ranker and report all use
these types. Validation only, no analytics here.
"""

from dataclasses import dataclass
from typing import NamedTuple


@dataclass(frozen=True)
class CallRecord:
    """One call: who called whom, and for how many seconds."""
    caller_id:        int
    receiver_id:      int
    duration_seconds: int

    def __post_init__(self):
        for name in ('caller_id', 'receiver_id', 'duration_seconds'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.caller_id == self.receiver_id:
            raise ValueError(f"caller_id and receiver_id are both {self.caller_id}")


class AggregateEntry(NamedTuple):
    """(customer_id, metric) pair produced by the ranker."""
    customer_id: int
    metric:      int


@dataclass(frozen=True)
class CustomerInfo:
    """Per-customer summary. Recomputed on every query."""
    calls_made:          int = 0
    calls_received:      int = 0
    total_call_duration: int = 0
