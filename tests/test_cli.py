"""
tests/test_cli.py
Config and command-line tests. Small seeded datasets in tmp_path.
"""

import json

import pytest

from callstats.cli import main
from callstats.config import CONFIG_FILENAME, DEFAULT_CONFIG, load_config, save_config
from callstats.report_export import verify_export


# ── CONFIG ───────────────────────────────────────────────────

class TestConfig:

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_save_then_load(self, tmp_path):
        config = {**DEFAULT_CONFIG, 'top_n': 7, 'seed': 3}
        path = save_config(config, tmp_path)
        assert path.name == CONFIG_FILENAME
        assert load_config(tmp_path) == config

    def test_partial_file_merged_over_defaults(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({'num_calls': 10}), encoding='utf-8')
        config = load_config(tmp_path)
        assert config['num_calls'] == 10
        assert config['customer_id'] == DEFAULT_CONFIG['customer_id']

    def test_invalid_json_falls_back_to_defaults(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text('{not json', encoding='utf-8')
        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_unknown_keys_ignored(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({'colour': 'red'}), encoding='utf-8')
        assert 'colour' not in load_config(tmp_path)

    def test_wrongly_typed_values_fall_back_per_key(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({
            'top_n': '3', 'num_calls': 10, 'seed': 1.5,
            'duration_mean': True, 'report_path': 7,
        }), encoding='utf-8')
        config = load_config(tmp_path)
        assert config['top_n'] == DEFAULT_CONFIG['top_n']
        assert config['num_calls'] == 10
        assert config['seed'] is None
        assert config['duration_mean'] == DEFAULT_CONFIG['duration_mean']
        assert config['report_path'] is None

    def test_integer_duration_accepted(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({'duration_std_dev': 30}), encoding='utf-8')
        assert load_config(tmp_path)['duration_std_dev'] == 30


# ── CLI ──────────────────────────────────────────────────────

class TestCli:

    def _run(self, tmp_path, *extra):
        return main(['--config-dir', str(tmp_path), *extra])

    def test_generate_and_report(self, tmp_path, capsys):
        dataset = tmp_path / 'data.txt'
        code = self._run(tmp_path, '-f', str(dataset), '-c', '20', '-k', '300', '--seed', '4')
        out = capsys.readouterr().out
        assert code == 0
        assert len(dataset.read_text(encoding='utf-8').splitlines()) == 300
        assert 'Top 3 customers with the longest call durations as callers:' in out
        assert 'Top 3 customers who received the fewest number of calls:' in out
        assert 'Customer information for customer 42:' in out
        assert 'Total calls made: 0' in out

    def test_reuse_keeps_existing_dataset(self, tmp_path, capsys):
        dataset = tmp_path / 'data.txt'
        dataset.write_text("1 2 100\n2 1 50\n1 3 200\n", encoding='utf-8')
        code = self._run(tmp_path, '-f', str(dataset), '--reuse', '-i', '1', '-n', '2')
        out = capsys.readouterr().out
        assert code == 0
        assert dataset.read_text(encoding='utf-8') == "1 2 100\n2 1 50\n1 3 200\n"
        assert 'Customer 1: 300 seconds' in out
        assert 'Total calls made: 2' in out
        assert 'Total call duration: 350 seconds' in out

    def test_json_out(self, tmp_path):
        dataset = tmp_path / 'data.txt'
        report = tmp_path / 'report.json'
        code = self._run(tmp_path, '-f', str(dataset), '-c', '10', '-k', '50',
                         '--seed', '1', '-o', str(report))
        assert code == 0
        exported = json.loads(report.read_text(encoding='utf-8'))
        assert verify_export(exported)
        assert exported['report_metadata']['run_parameters']['num_calls'] == 50

    def test_config_values_used(self, tmp_path):
        dataset = tmp_path / 'from_config.txt'
        save_config({**DEFAULT_CONFIG, 'dataset_path': str(dataset),
                     'num_customers': 5, 'num_calls': 25, 'seed': 2}, tmp_path)
        assert self._run(tmp_path) == 0
        assert len(dataset.read_text(encoding='utf-8').splitlines()) == 25

    def test_malformed_dataset_fails_run(self, tmp_path, capsys):
        dataset = tmp_path / 'bad.txt'
        dataset.write_text("1 2 100\n3 3 10\n", encoding='utf-8')
        code = self._run(tmp_path, '-f', str(dataset), '--reuse')
        assert code == 1
        assert 'line 2' in capsys.readouterr().out

    def test_undecodable_dataset_fails_run(self, tmp_path, capsys):
        dataset = tmp_path / 'bad.txt'
        dataset.write_bytes(b"1 2 100\n\xff\xfe 3 4\n")
        code = self._run(tmp_path, '-f', str(dataset), '--reuse')
        assert code == 1
        assert 'line 2' in capsys.readouterr().out

    def test_string_config_value_does_not_crash_run(self, tmp_path, capsys):
        dataset = tmp_path / 'data.txt'
        dataset.write_text("1 2 100\n2 1 50\n", encoding='utf-8')
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({'top_n': '3'}), encoding='utf-8')
        code = self._run(tmp_path, '-f', str(dataset), '--reuse')
        assert code == 0
        assert 'Top 3 customers' in capsys.readouterr().out

    def test_unwritable_dataset_fails_run(self, tmp_path):
        code = self._run(tmp_path, '-f', str(tmp_path / 'no' / 'data.txt'), '-c', '5', '-k', '5')
        assert code == 1

    def test_bad_population_reported(self, tmp_path):
        code = self._run(tmp_path, '-f', str(tmp_path / 'd.txt'), '-c', '1', '-k', '5')
        assert code == 2
