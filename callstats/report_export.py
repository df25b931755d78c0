"""
callstats/report_export.py
JSON export of an analytics report.

Every export includes: report metadata (generated_at, run parameters),
a data integrity hash (SHA-256 of the export content before the hash
field is added) and the export format version.
"""

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from callstats.errors import DatasetIOError
from callstats.report import Report, report_to_dict

logger = logging.getLogger(__name__)

EXPORT_FORMAT_VERSION = "1.0"


def _build_export_payload(
    report: Report,
    run_parameters: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build export payload (no hash yet)."""
    report_metadata = {
        "generated_at": report.generated_at,
        "run_parameters": dict(run_parameters) if run_parameters else {},
    }
    return {
        "export_format_version": EXPORT_FORMAT_VERSION,
        "report_metadata": report_metadata,
        "report": report_to_dict(report),
    }


def _content_hash(payload: Dict[str, Any]) -> str:
    """SHA-256 of canonical JSON serialization of payload (no hash field)."""
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def export_to_dict(
    report: Report,
    run_parameters: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    payload = _build_export_payload(report, run_parameters)
    return {**payload, "content_hash_sha256": _content_hash(payload)}


def export_to_json(
    report: Report,
    run_parameters: Optional[Dict[str, Any]] = None,
    indent: Optional[int] = 2,
) -> str:
    return json.dumps(export_to_dict(report, run_parameters), indent=indent)


def verify_export(export: Dict[str, Any]) -> bool:
    """True if content_hash_sha256 matches the rest of the export."""
    claimed = export.get("content_hash_sha256")
    payload = {k: v for k, v in export.items() if k != "content_hash_sha256"}
    return bool(claimed) and claimed == _content_hash(payload)


def write_export(
    report: Report,
    path: Union[str, Path],
    run_parameters: Optional[Dict[str, Any]] = None,
) -> Path:
    """Write the JSON export to path. Raises DatasetIOError on failure."""
    path = Path(path)
    try:
        path.write_text(export_to_json(report, run_parameters), encoding="utf-8")
    except OSError as e:
        logger.error(f"Report write error {path}: {e}")
        raise DatasetIOError(path, "Cannot write report", e) from e
    logger.info(f"Report exported to {path}")
    return path
