"""
callstats/ranking.py
Top-N selection over an aggregation result.

TIE-BREAK:
  Equal metrics are ordered by customer id ascending, for both the
  descending ("most") and ascending ("fewest") directions. Output never
  depends on dict iteration order.
"""

import heapq
from typing import Dict, List

from callstats.models.record import AggregateEntry


def top_n(metrics: Dict[int, int], n: int, descending: bool = True) -> List[AggregateEntry]:
    """
    Return up to n (customer_id, metric) entries.

    n <= 0 returns []. n larger than the number of customers returns all
    of them, ranked.
    """
    if n <= 0 or not metrics:
        return []

    if descending:
        sort_key = lambda item: (-item[1], item[0])
    else:
        sort_key = lambda item: (item[1], item[0])

    return [
        AggregateEntry(customer_id, metric)
        for customer_id, metric in heapq.nsmallest(n, metrics.items(), key=sort_key)
    ]


def rank_desc(metrics: Dict[int, int], n: int) -> List[AggregateEntry]:
    return top_n(metrics, n, descending=True)


def rank_asc(metrics: Dict[int, int], n: int) -> List[AggregateEntry]:
    return top_n(metrics, n, descending=False)
