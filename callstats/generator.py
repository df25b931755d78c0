"""
callstats/generator.py
Random call dataset for a fictitious carrier.

Caller and receiver are drawn uniformly from 1..num_customers.
Duration ~ Normal(mean, std_dev), rounded half-up to whole seconds.
A draw with caller == receiver or duration <= 0 is thrown away and the
whole triple is drawn again, so every emitted record is valid.
"""

import logging
import math
import random
from pathlib import Path
from typing import Iterator, List, Optional, Union

from callstats.models.record import CallRecord
from callstats.parsers.dataset_parser import write_dataset_file

logger = logging.getLogger(__name__)

DEFAULT_NUM_CUSTOMERS = 500
DEFAULT_NUM_CALLS     = 200_000
DEFAULT_MEAN          = 300.0
DEFAULT_STD_DEV       = 60.0


def iter_records(
    num_customers: int,
    num_calls:     int,
    mean:          float                   = DEFAULT_MEAN,
    std_dev:       float                   = DEFAULT_STD_DEV,
    rng:           Optional[random.Random] = None,
) -> Iterator[CallRecord]:
    """Iterator over num_calls valid records. Arguments are checked before the first draw."""
    if num_customers < 2:
        raise ValueError(f"num_customers must be at least 2, got {num_customers}")
    if num_calls < 0:
        raise ValueError(f"num_calls must not be negative, got {num_calls}")
    if mean <= 0:
        raise ValueError(f"mean must be positive, got {mean}")
    if std_dev <= 0:
        raise ValueError(f"std_dev must be positive, got {std_dev}")

    return _draw(num_customers, num_calls, mean, std_dev, rng or random.Random())


def _draw(num_customers, num_calls, mean, std_dev, rng):
    emitted = 0
    while emitted < num_calls:
        caller_id   = rng.randint(1, num_customers)
        receiver_id = rng.randint(1, num_customers)
        duration    = math.floor(rng.gauss(mean, std_dev) + 0.5)
        if caller_id == receiver_id or duration <= 0:
            continue
        emitted += 1
        yield CallRecord(caller_id, receiver_id, duration)


def generate_records(
    num_customers: int   = DEFAULT_NUM_CUSTOMERS,
    num_calls:     int   = DEFAULT_NUM_CALLS,
    mean:          float = DEFAULT_MEAN,
    std_dev:       float = DEFAULT_STD_DEV,
    seed:          Optional[int] = None,
) -> List[CallRecord]:
    """Materialize a dataset. Same seed, same records."""
    records = list(iter_records(num_customers, num_calls, mean, std_dev, random.Random(seed)))
    logger.info(f"Generated {len(records)} calls across {num_customers} customers")
    return records


def generate_dataset(
    path:          Union[str, Path],
    num_customers: int   = DEFAULT_NUM_CUSTOMERS,
    num_calls:     int   = DEFAULT_NUM_CALLS,
    mean:          float = DEFAULT_MEAN,
    std_dev:       float = DEFAULT_STD_DEV,
    seed:          Optional[int] = None,
) -> int:
    """
    Generate and write a dataset file in one go.
    Returns the number of records written. Raises DatasetIOError on write failure.
    """
    rng = random.Random(seed)
    return write_dataset_file(
        path,
        iter_records(num_customers, num_calls, mean, std_dev, rng),
    )
