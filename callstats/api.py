"""
callstats/api.py
─────────────────────────────────────────────────────────────────────────────
callstats: Dual-mode API layer

TWO USAGE MODES:
  1. Importable module:
         from callstats.api import CallStatsAPI
         api  = CallStatsAPI(dataset_path=Path("telecom_data.txt"))
         top  = api.get_view("longest_callers", n=5)
         info = api.get_customer(42)

  2. FastAPI HTTP server:
         python -m callstats.api                   # default: port 8765
         python -m callstats.api --port 9000
         uvicorn callstats.api:app --port 8765

ENDPOINTS:
  GET  /health                 : server status and dataset existence
  GET  /views                  : available ranking view keys
  GET  /views/{key}?n=3        : one ranking view
  GET  /customers/{customer_id}: profile summary for one customer
  GET  /report?n=3&customer_id=: every view plus one profile (export format)
  POST /generate               : regenerate the dataset file

The dataset file is re-read on every request; nothing is cached between
requests.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from callstats.errors import DataFormatError, DatasetIOError
from callstats.generator import (
    DEFAULT_MEAN,
    DEFAULT_NUM_CALLS,
    DEFAULT_NUM_CUSTOMERS,
    DEFAULT_STD_DEV,
    generate_dataset,
)
from callstats.profile import get_customer_info
from callstats.report import VIEW_SPECS, VIEWS_BY_KEY, build_report, build_view, report_to_dict
from callstats.report_export import export_to_dict
from callstats.store import RecordStore

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


# ═══════════════════════════════════════════════════════════════════════════
# IMPORTABLE CLASS
# ═══════════════════════════════════════════════════════════════════════════

class CallStatsAPI:
    """
    Pure-Python wrapper around one dataset file.
    No HTTP layer required; import and call directly.
    """

    def __init__(self, dataset_path: Path = Path("telecom_data.txt")):
        self.dataset_path = Path(dataset_path)

    def dataset_exists(self) -> bool:
        return self.dataset_path.exists()

    def load(self) -> RecordStore:
        """Read the dataset. Raises DatasetIOError / DataFormatError."""
        return RecordStore.from_file(self.dataset_path)

    # ── QUERIES ───────────────────────────────────────────────────────────

    def list_views(self) -> List[Dict[str, Any]]:
        return [
            {"key": s.key, "unit": s.unit, "direction": "desc" if s.descending else "asc"}
            for s in VIEW_SPECS
        ]

    def get_view(self, key: str, n: int = 3) -> Dict[str, Any]:
        """
        Return one ranking view as a dict.
        Raises KeyError for an unknown view key.
        """
        if key not in VIEWS_BY_KEY:
            raise KeyError(key)
        return report_to_dict(build_view(self.load(), key, n))

    def get_customer(self, customer_id: int) -> Dict[str, Any]:
        """Profile summary. Unknown ids give all-zero values."""
        info = get_customer_info(self.load(), customer_id)
        return {"customer_id": customer_id, **asdict(info)}

    def get_report(self, n: int = 3, customer_id: Optional[int] = 42) -> Dict[str, Any]:
        report = build_report(self.load(), top_n=n, customer_id=customer_id)
        return export_to_dict(report, run_parameters={
            "dataset": str(self.dataset_path),
            "top_n": n,
            "customer_id": customer_id,
        })

    # ── GENERATION ────────────────────────────────────────────────────────

    def generate(
        self,
        num_customers: int = DEFAULT_NUM_CUSTOMERS,
        num_calls: int = DEFAULT_NUM_CALLS,
        mean: float = DEFAULT_MEAN,
        std_dev: float = DEFAULT_STD_DEV,
        seed: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Overwrite the dataset file with fresh random records."""
        logger.info(f"Generate started | dataset={self.dataset_path}")
        written = generate_dataset(
            self.dataset_path,
            num_customers=num_customers,
            num_calls=num_calls,
            mean=mean,
            std_dev=std_dev,
            seed=seed,
        )
        return {
            "status": "ok",
            "records_written": written,
            "num_customers": num_customers,
            "dataset_path": str(self.dataset_path),
        }


# ═══════════════════════════════════════════════════════════════════════════
# FASTAPI HTTP APP
# ═══════════════════════════════════════════════════════════════════════════

class GenerateRequest(BaseModel):
    num_customers: int = Field(DEFAULT_NUM_CUSTOMERS, ge=2)
    num_calls: int = Field(DEFAULT_NUM_CALLS, ge=0)
    mean: float = Field(DEFAULT_MEAN, gt=0)
    std_dev: float = Field(DEFAULT_STD_DEV, gt=0)
    seed: Optional[int] = None


def build_app(dataset_path: Path = Path("telecom_data.txt")) -> FastAPI:
    """Build a FastAPI application serving one dataset file."""
    _api = CallStatsAPI(dataset_path=dataset_path)

    _app = FastAPI(
        title="callstats API",
        description="Synthetic call dataset analytics: rankings and customer profiles",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url=None,
    )

    def _load_guard(fn, *args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except DataFormatError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except DatasetIOError as exc:
            if not _api.dataset_exists():
                raise HTTPException(
                    status_code=404,
                    detail="Dataset not found. POST /generate first.",
                ) from exc
            logger.error(f"Dataset error: {exc}")
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    @_app.get("/health", summary="Health check")
    def health():
        return {
            "status": "ok",
            "dataset_exists": _api.dataset_exists(),
            "dataset_path": str(_api.dataset_path),
            "version": API_VERSION,
        }

    @_app.get("/views", summary="List ranking views")
    def list_views():
        return {"views": _api.list_views()}

    @_app.get("/views/{key}", summary="One ranking view")
    def get_view(key: str, n: int = Query(3, ge=0, le=1000)):
        if key not in VIEWS_BY_KEY:
            raise HTTPException(status_code=404, detail=f"Unknown view: {key}")
        return _load_guard(_api.get_view, key, n)

    @_app.get("/customers/{customer_id}", summary="Customer profile")
    def get_customer(customer_id: int):
        return _load_guard(_api.get_customer, customer_id)

    @_app.get("/report", summary="Full report")
    def get_report(
        n: int = Query(3, ge=0, le=1000),
        customer_id: Optional[int] = Query(42),
    ):
        return _load_guard(_api.get_report, n, customer_id)

    @_app.post("/generate", summary="Regenerate dataset")
    def generate(req: GenerateRequest):
        try:
            return _api.generate(
                num_customers=req.num_customers,
                num_calls=req.num_calls,
                mean=req.mean,
                std_dev=req.std_dev,
                seed=req.seed,
            )
        except DatasetIOError as exc:
            logger.error(f"Generate endpoint error: {exc}")
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    return _app


# Module-level app instance, used by uvicorn callstats.api:app
app = build_app()


# ═══════════════════════════════════════════════════════════════════════════
# CLI ENTRYPOINT: python -m callstats.api
# ═══════════════════════════════════════════════════════════════════════════

def serve(argv: Optional[List[str]] = None) -> None:
    import argparse

    import uvicorn

    parser = argparse.ArgumentParser(
        prog="callstats.api",
        description="callstats API server",
    )
    parser.add_argument("--port", type=int, default=8765,
                        help="Port to bind (default: 8765)")
    parser.add_argument("--dataset", type=str, default="telecom_data.txt",
                        help="Dataset file (default: telecom_data.txt)")
    parser.add_argument("--host", type=str, default="127.0.0.1",
                        help="Host to bind (default: 127.0.0.1)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S',
    )
    uvicorn.run(
        build_app(dataset_path=Path(args.dataset)),
        host=args.host,
        port=args.port,
        log_level="info",
    )


if __name__ == "__main__":
    serve()
