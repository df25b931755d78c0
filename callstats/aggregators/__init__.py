"""
callstats/aggregators: per-customer grouping and reduction.
"""

from callstats.aggregators.call_aggregator import (
    AGGREGATIONS,
    aggregate,
    distinct_callers_per_receiver,
    distinct_receivers_per_caller,
    incoming_call_count,
    outgoing_call_count,
    total_incoming_duration,
    total_outgoing_duration,
)

__all__ = [
    "AGGREGATIONS",
    "aggregate",
    "distinct_callers_per_receiver",
    "distinct_receivers_per_caller",
    "incoming_call_count",
    "outgoing_call_count",
    "total_incoming_duration",
    "total_outgoing_duration",
]
