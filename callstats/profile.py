"""
callstats/profile.py
Customer Profile Query: three scalar aggregates for one customer id.
Reads the records directly; no aggregation tables involved.
"""

import logging
from typing import Iterable

from callstats.models.record import CallRecord, CustomerInfo

logger = logging.getLogger(__name__)


def get_customer_info(records: Iterable[CallRecord], customer_id: int) -> CustomerInfo:
    """
    Single pass over records.

    total_call_duration counts every record where the customer is either
    party. An id that appears nowhere yields CustomerInfo(0, 0, 0).
    """
    made     = 0
    received = 0
    total    = 0

    for record in records:
        if record.caller_id == customer_id:
            made  += 1
            total += record.duration_seconds
        if record.receiver_id == customer_id:
            received += 1
            total    += record.duration_seconds

    logger.debug(f"Customer {customer_id}: made={made} received={received} duration={total}")
    return CustomerInfo(
        calls_made          = made,
        calls_received      = received,
        total_call_duration = total,
    )
