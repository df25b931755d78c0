"""
tests/test_generator.py
Random dataset generator tests. Seeds keep every run reproducible.
"""

import random

import pytest

from callstats.generator import generate_dataset, generate_records, iter_records
from callstats.parsers.dataset_parser import parse_dataset_file


class TestGenerator:

    @pytest.mark.parametrize('num_customers', [2, 3, 50])
    def test_every_record_valid(self, num_customers):
        records = generate_records(num_customers=num_customers, num_calls=1000, seed=1)
        assert len(records) == 1000
        for r in records:
            assert r.caller_id != r.receiver_id
            assert r.duration_seconds > 0
            assert 1 <= r.caller_id <= num_customers
            assert 1 <= r.receiver_id <= num_customers

    def test_same_seed_same_records(self):
        a = generate_records(num_customers=30, num_calls=200, seed=99)
        b = generate_records(num_customers=30, num_calls=200, seed=99)
        assert a == b

    def test_different_seed_different_records(self):
        a = generate_records(num_customers=30, num_calls=200, seed=1)
        b = generate_records(num_customers=30, num_calls=200, seed=2)
        assert a != b

    def test_zero_calls(self):
        assert generate_records(num_customers=5, num_calls=0, seed=1) == []

    def test_durations_centre_on_mean(self):
        records = generate_records(num_customers=100, num_calls=5000, seed=5)
        mean = sum(r.duration_seconds for r in records) / len(records)
        assert 290 <= mean <= 310

    def test_low_mean_still_positive(self):
        # About half the draws round to zero or below and must be redrawn
        records = list(iter_records(10, 300, mean=1.0, std_dev=5.0, rng=random.Random(3)))
        assert len(records) == 300
        assert all(r.duration_seconds > 0 for r in records)

    @pytest.mark.parametrize('kwargs', [
        {'num_customers': 1, 'num_calls': 10},
        {'num_customers': 0, 'num_calls': 10},
        {'num_customers': 10, 'num_calls': -1},
        {'num_customers': 10, 'num_calls': 10, 'std_dev': 0},
        {'num_customers': 10, 'num_calls': 10, 'mean': 0},
        {'num_customers': 10, 'num_calls': 10, 'mean': -1e9},
    ])
    def test_invalid_arguments_rejected(self, kwargs):
        with pytest.raises(ValueError):
            iter_records(**kwargs)

    def test_invalid_arguments_leave_no_file(self, tmp_path):
        path = tmp_path / 'data.txt'
        with pytest.raises(ValueError):
            generate_dataset(path, num_customers=1, num_calls=10)
        assert not path.exists()

    def test_generate_dataset_matches_generate_records(self, tmp_path):
        path = tmp_path / 'data.txt'
        written = generate_dataset(path, num_customers=25, num_calls=400, seed=8)
        assert written == 400
        assert parse_dataset_file(path) == generate_records(num_customers=25, num_calls=400, seed=8)
