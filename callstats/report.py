"""
callstats/report.py
Structured analytics report.

Input: the call records (RecordStore or any sequence).
Output: Report with summary stats, the eight ranking views and one
customer profile, suitable for console printing and JSON export.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence

from callstats.aggregators.call_aggregator import AGGREGATIONS
from callstats.models.record import AggregateEntry, CallRecord
from callstats.profile import get_customer_info
from callstats.ranking import top_n as rank_top_n

DEFAULT_TOP_N       = 3
DEFAULT_CUSTOMER_ID = 42


# ── VIEW CATALOGUE ───────────────────────────────────────────

@dataclass(frozen=True)
class ViewSpec:
    key:         str
    aggregation: str    # key into AGGREGATIONS
    descending:  bool
    title:       str    # "{n}" is replaced by the requested count
    unit:        str


VIEW_SPECS: List[ViewSpec] = [
    ViewSpec('longest_callers',      'total_outgoing_duration',       True,
             'Top {n} customers with the longest call durations as callers', 'seconds'),
    ViewSpec('longest_receivers',    'total_incoming_duration',       True,
             'Top {n} customers with the longest call durations as receivers', 'seconds'),
    ViewSpec('widest_callers',       'distinct_receivers_per_caller', True,
             'Top {n} customers who made calls to the highest number of unique customers', 'unique customers'),
    ViewSpec('widest_receivers',     'distinct_callers_per_receiver', True,
             'Top {n} customers who received calls from the highest number of unique customers', 'unique customers'),
    ViewSpec('frequent_callers',     'outgoing_call_count',           True,
             'Top {n} customers who made the highest number of calls', 'calls'),
    ViewSpec('frequent_receivers',   'incoming_call_count',           True,
             'Top {n} customers who received the highest number of calls', 'calls'),
    ViewSpec('infrequent_callers',   'outgoing_call_count',           False,
             'Top {n} customers who made the fewest number of calls', 'calls'),
    ViewSpec('infrequent_receivers', 'incoming_call_count',           False,
             'Top {n} customers who received the fewest number of calls', 'calls'),
]

VIEWS_BY_KEY: Dict[str, ViewSpec] = {spec.key: spec for spec in VIEW_SPECS}


# ── REPORT SCHEMA ────────────────────────────────────────────

@dataclass
class SummaryStats:
    record_count:   int = 0
    caller_count:   int = 0
    receiver_count: int = 0
    customer_count: int = 0
    total_duration: int = 0


@dataclass
class RankingView:
    key:       str
    title:     str
    unit:      str
    direction: str                  # 'desc' / 'asc'
    entries:   List[AggregateEntry] = field(default_factory=list)


@dataclass
class CustomerSummary:
    customer_id:         int
    calls_made:          int
    calls_received:      int
    total_call_duration: int


@dataclass
class Report:
    summary:      SummaryStats
    views:        List[RankingView]
    customer:     Optional[CustomerSummary]
    top_n:        int
    generated_at: str


# ── BUILDERS ─────────────────────────────────────────────────

def build_view(
    records: Sequence[CallRecord],
    key:     str,
    n:       int = DEFAULT_TOP_N,
    _cache:  Optional[Dict[str, Dict[int, int]]] = None,
) -> RankingView:
    """
    Compute one ranking view by key. Raises KeyError for an unknown key.
    _cache lets build_report share an aggregation between two views.
    """
    spec    = VIEWS_BY_KEY[key]
    metrics = _metrics(records, spec.aggregation, _cache)
    return RankingView(
        key       = spec.key,
        title     = spec.title.format(n=n),
        unit      = spec.unit,
        direction = 'desc' if spec.descending else 'asc',
        entries   = rank_top_n(metrics, n, descending=spec.descending),
    )


def build_report(
    records:     Sequence[CallRecord],
    top_n:       int           = DEFAULT_TOP_N,
    customer_id: Optional[int] = DEFAULT_CUSTOMER_ID,
) -> Report:
    """
    Build every view plus the customer profile.
    Each aggregation runs once even when two views rank it.
    Pass customer_id=None to skip the profile query.
    """
    cache: Dict[str, Dict[int, int]] = {}
    views = [build_view(records, spec.key, top_n, cache) for spec in VIEW_SPECS]

    callers   = cache['outgoing_call_count']
    receivers = cache['incoming_call_count']
    summary = SummaryStats(
        record_count   = len(records),
        caller_count   = len(callers),
        receiver_count = len(receivers),
        customer_count = len(set(callers) | set(receivers)),
        total_duration = sum(cache['total_outgoing_duration'].values()),
    )

    customer = None
    if customer_id is not None:
        info = get_customer_info(records, customer_id)
        customer = CustomerSummary(
            customer_id         = customer_id,
            calls_made          = info.calls_made,
            calls_received      = info.calls_received,
            total_call_duration = info.total_call_duration,
        )

    return Report(
        summary      = summary,
        views        = views,
        customer     = customer,
        top_n        = top_n,
        generated_at = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    )


def report_to_dict(report: Report) -> Dict:
    """Convert Report to a JSON-serializable dict (for export)."""
    def _to_dict(obj):
        if hasattr(obj, "__dataclass_fields__"):
            return {k: _to_dict(getattr(obj, k)) for k in obj.__dataclass_fields__}
        if isinstance(obj, AggregateEntry):
            return {"customer_id": obj.customer_id, "metric": obj.metric}
        if isinstance(obj, list):
            return [_to_dict(x) for x in obj]
        return obj

    return _to_dict(report)


def _metrics(
    records: Sequence[CallRecord],
    name:    str,
    cache:   Optional[Dict[str, Dict[int, int]]],
) -> Dict[int, int]:
    aggregate_fn: Callable = AGGREGATIONS[name]
    if cache is None:
        return aggregate_fn(records)
    if name not in cache:
        cache[name] = aggregate_fn(records)
    return cache[name]
