from callstats.models.record import AggregateEntry, CallRecord, CustomerInfo

__all__ = [
    "AggregateEntry",
    "CallRecord",
    "CustomerInfo",
]
