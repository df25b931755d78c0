"""
callstats/cli.py
Command-line interface: generate a call dataset, analyze it, print the
eight ranking views and one customer profile.

USAGE:
  callstats
  callstats --customers 500 --calls 200000 --top 3 --customer-id 42
  callstats --dataset ./telecom_data.txt --reuse
  callstats --reuse --json-out report.json

EXAMPLES:
  # Reproducible small run
  callstats --customers 50 --calls 5000 --seed 7 --dataset small.txt

  # Re-analyze an existing dataset without regenerating it
  callstats --dataset small.txt --reuse --top 5
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from callstats.config import load_config
from callstats.errors import CallStatsError
from callstats.generator import generate_dataset
from callstats.report import Report, build_report
from callstats.report_export import write_export
from callstats.store import RecordStore

logger = logging.getLogger(__name__)

GREEN  = '\033[92m'
YELLOW = '\033[93m'
RED    = '\033[91m'
CYAN   = '\033[96m'
RESET  = '\033[0m'
BOLD   = '\033[1m'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog        = 'callstats',
        description = 'callstats: synthetic call dataset generator and analytics',
        formatter_class = argparse.RawDescriptionHelpFormatter,
        epilog = """
Ties in every ranking are broken by customer id, ascending.
Values not given on the command line come from callstats_config.json.
        """
    )

    parser.add_argument(
        '--dataset', '-f',
        type    = Path,
        help    = 'Dataset file to write and/or read (default from config: telecom_data.txt)',
    )
    parser.add_argument(
        '--customers', '-c',
        type    = int,
        help    = 'Customer population size (default from config: 500)',
    )
    parser.add_argument(
        '--calls', '-k',
        type    = int,
        help    = 'Number of call records to generate (default from config: 200000)',
    )
    parser.add_argument(
        '--seed',
        type    = int,
        help    = 'Random seed for reproducible datasets',
    )
    parser.add_argument(
        '--reuse', '-r',
        action  = 'store_true',
        help    = 'Skip generation when the dataset file already exists',
    )
    parser.add_argument(
        '--top', '-n',
        type    = int,
        help    = 'Entries per ranking (default from config: 3)',
    )
    parser.add_argument(
        '--customer-id', '-i',
        type    = int,
        help    = 'Customer for the profile summary (default from config: 42)',
    )
    parser.add_argument(
        '--json-out', '-o',
        type    = Path,
        help    = 'Also write the report as JSON to this path',
    )
    parser.add_argument(
        '--config-dir',
        type    = Path,
        default = None,
        help    = 'Directory holding callstats_config.json (default: cwd)',
    )
    parser.add_argument(
        '--verbose', '-v',
        action  = 'store_true',
        help    = 'Enable debug logging',
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # ── LOGGING SETUP ────────────────────────────────────────
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level   = log_level,
        format  = '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt = '%H:%M:%S',
    )

    # ── MERGE CONFIG ─────────────────────────────────────────
    config        = load_config(args.config_dir)
    dataset       = args.dataset or Path(config['dataset_path'])
    num_customers = _pick(args.customers,   config['num_customers'])
    num_calls     = _pick(args.calls,       config['num_calls'])
    seed          = _pick(args.seed,        config['seed'])
    top_n         = _pick(args.top,         config['top_n'])
    customer_id   = _pick(args.customer_id, config['customer_id'])
    json_out      = args.json_out or (Path(config['report_path']) if config['report_path'] else None)

    try:
        # ── GENERATE ─────────────────────────────────────────
        if args.reuse and dataset.exists():
            _step(f"Reusing existing dataset {CYAN}{dataset}{RESET}")
        else:
            _step(f"Generating {num_calls:,} calls for {num_customers:,} customers...")
            t0 = time.time()
            written = generate_dataset(
                dataset,
                num_customers = num_customers,
                num_calls     = num_calls,
                mean          = config['duration_mean'],
                std_dev       = config['duration_std_dev'],
                seed          = seed,
            )
            _ok(f"{written:,} records written to {dataset} in {_elapsed(t0)}")

        # ── LOAD ─────────────────────────────────────────────
        _step("Loading dataset...")
        t0    = time.time()
        store = RecordStore.from_file(dataset)
        _ok(f"{len(store):,} records loaded in {_elapsed(t0)}")

        # ── ANALYZE ──────────────────────────────────────────
        _step("Computing rankings...")
        t0     = time.time()
        report = build_report(store, top_n=top_n, customer_id=customer_id)
        _ok(f"Report built in {_elapsed(t0)}")

        print_report(report)

        # ── EXPORT ───────────────────────────────────────────
        if json_out:
            write_export(report, json_out, run_parameters={
                'dataset':       str(dataset),
                'num_customers': num_customers,
                'num_calls':     num_calls,
                'seed':          seed,
                'top_n':         top_n,
                'customer_id':   customer_id,
                'reused':        bool(args.reuse),
            })
            _ok(f"JSON report → {json_out}")

    except CallStatsError as e:
        logger.debug("Run failed", exc_info=True)
        _print(f"{RED}Error: {e}{RESET}")
        return 1
    except ValueError as e:
        _print(f"{RED}Invalid arguments: {e}{RESET}")
        return 2

    return 0


# ── PRINT HELPERS ────────────────────────────────────────────

def print_report(report: Report) -> None:
    s = report.summary
    _print(f"\n{BOLD}Dataset:{RESET} {s.record_count:,} calls, "
           f"{s.customer_count:,} customers, {s.total_duration:,} seconds total")

    for view in report.views:
        _print(f"\n{BOLD}{view.title}:{RESET}")
        if not view.entries:
            _print(f"  {YELLOW}(no data){RESET}")
        for entry in view.entries:
            _print(f"Customer {entry.customer_id}: {entry.metric} {view.unit}")

    if report.customer is not None:
        c = report.customer
        _print(f"\n{BOLD}Customer information for customer {c.customer_id}:{RESET}")
        _print(f"Total calls made: {c.calls_made}")
        _print(f"Total calls received: {c.calls_received}")
        _print(f"Total call duration: {c.total_call_duration} seconds")
    _print("")


def _pick(value, fallback):
    return fallback if value is None else value

def _step(msg):  _print(f"  {CYAN}→{RESET} {msg}")
def _ok(msg):    _print(f"  {GREEN}✓{RESET} {msg}")
def _print(msg): print(msg)

def _elapsed(t0: float) -> str:
    s = time.time() - t0
    return f"{s:.1f}s" if s < 60 else f"{int(s//60)}m {int(s%60)}s"


if __name__ == '__main__':
    sys.exit(main())
