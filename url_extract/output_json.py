"""
Canonical JSON output writer for URL extraction runs.
Produces urlx.v1 schema artifacts.
"""

import os
import json
import hashlib
from datetime import datetime, timezone
from typing import Optional

from url_extract.config import get_settings

# Package version - update on releases
URLX_VERSION = "0.1.0"


def _sha256(data: str) -> str:
    """Compute SHA256 hash of string data."""
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def _generate_doc_id(uri: str) -> str:
    """Generate deterministic document ID from URI."""
    return f"doc_{_sha256(uri)[:12]}"


def write_canonical_json(
    run_id: str,
    triggered_by: str,
    strip_arguments: bool,
    documents: list[dict],
    start_time: datetime,
    end_time: Optional[datetime] = None,
    output_dir: Optional[str] = None,
) -> dict:
    """
    Write canonical urlx.v1 JSON artifact.

    Args:
        run_id: Unique run identifier (computed at entrypoint)
        triggered_by: "cli" | "web_api"
        strip_arguments: Whether query strings were stripped
        documents: List of document dicts with structure:
            {
                "uri": str,
                "source_type": str,  # "txt" | "html" | "pdf" | "docx" | "stdin"
                "urls": set[str] | list[str],
                "errors": list[str]
            }
        start_time: Run start timestamp
        end_time: Run end timestamp (defaults to now)
        output_dir: Directory for output file (defaults to configured output_dir)

    Returns:
        Dict with keys: run_id, output_path, stats
    """
    if end_time is None:
        end_time = datetime.now(timezone.utc)
    if output_dir is None:
        output_dir = get_settings().output_dir

    canonical_documents = []
    all_urls = set()
    total_urls = 0
    total_errors = 0

    for doc in documents:
        urls = sorted(doc.get("urls", []))
        all_urls.update(urls)
        total_urls += len(urls)
        total_errors += len(doc.get("errors", []))

        canonical_documents.append({
            "doc_id": _generate_doc_id(doc["uri"]),
            "source": {
                "type": doc.get("source_type", "txt"),
                "uri": doc["uri"],
            },
            "urls": urls,
            "url_count": len(urls),
            "errors": doc.get("errors", []),
        })

    processing_time = (end_time - start_time).total_seconds()
    aggregate_stats = {
        "documents_processed": len(canonical_documents),
        "total_urls": total_urls,
        "unique_urls": len(all_urls),
        "total_errors": total_errors,
        "processing_time_seconds": round(processing_time, 2),
    }

    canonical_output = {
        "schema_version": "urlx.v1",
        "urlx_version": URLX_VERSION,
        "run": {
            "run_id": run_id,
            "timestamp_start": start_time.isoformat(),
            "timestamp_end": end_time.isoformat(),
            "triggered_by": triggered_by,
            "input_count": len(documents),
            "strip_arguments": strip_arguments,
        },
        "documents": canonical_documents,
        "aggregate_stats": aggregate_stats,
    }

    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, f"{run_id}.json")

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(canonical_output, f, ensure_ascii=False, indent=2)

    return {
        "run_id": run_id,
        "output_path": output_path,
        "stats": aggregate_stats,
    }


def generate_run_id(input_uris: list[str]) -> str:
    """
    Generate deterministic run ID from timestamp and input URIs.

    Format: urlx_YYYY-MM-DDTHH-MM-SSZ_XXXXXXXX
    """
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%SZ")
    uri_hash = _sha256("".join(sorted(input_uris)))[:8]
    return f"urlx_{timestamp}_{uri_hash}"
