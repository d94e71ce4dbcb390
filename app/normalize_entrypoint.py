"""Normalize entrypoint - Standalone script for normalizing payload files offline.

Usage:
    python -m app.normalize_entrypoint offers.json              # One file
    python -m app.normalize_entrypoint a.json b.json            # Dedupe across files

Each file holds one JSON object or a JSON array of objects. Results are
printed as JSON lines: {"status": "accepted" | "duplicate" | "unrecognized" | "invalid", ...}.
A file that is not valid JSON is reported and skipped; the rest still run.
Set LOG_STREAM=stderr to keep log lines out of that output.
"""

import json
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List

from app.core.logging import get_logger
from app.normalizers import UnrecognizedSchemaError
from app.services.dedupe_store import DedupeStore
from app.services.ingest_service import IngestService

logger = get_logger("normalize_entrypoint")


def load_payloads(path: Path) -> List[Dict[str, Any]]:
    """Read every object payload in a JSON file; non-objects are skipped.

    Raises:
        ValueError: If the file is not valid UTF-8 JSON.
    """
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f, parse_float=Decimal)
    items = data if isinstance(data, list) else [data]
    payloads = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning(f"Skipping non-object payload #{index} in {path}")
            continue
        payloads.append(item)
    return payloads


def run_files(paths: List[Path], out=None) -> Dict[str, int]:
    """Normalize all payloads in the given files through one store."""
    out = out or sys.stdout
    # Offline runs finish well inside the TTL, so no janitor is needed
    service = IngestService(DedupeStore())
    counts = {"accepted": 0, "duplicate": 0, "unrecognized": 0, "invalid_files": 0}

    for path in paths:
        logger.info(f"Normalizing payloads from {path}")
        try:
            payloads = load_payloads(path)
        except ValueError as exc:
            counts["invalid_files"] += 1
            logger.error(f"Failed to read {path}: {exc}")
            out.write(json.dumps({"status": "invalid", "error": str(exc), "source": str(path)}) + "\n")
            continue

        for raw in payloads:
            try:
                result = service.ingest(raw)
            except UnrecognizedSchemaError as exc:
                counts["unrecognized"] += 1
                out.write(json.dumps({"status": "unrecognized", "error": str(exc), "source": str(path)}) + "\n")
                continue
            counts[result.status] += 1
            line = {"status": result.status, "offer": result.offer.model_dump(mode="json")}
            out.write(json.dumps(line) + "\n")

    return counts


def main():
    """Main entry point for batch normalization."""
    if len(sys.argv) < 2:
        logger.error("Usage: python -m app.normalize_entrypoint FILE [FILE ...]")
        sys.exit(2)

    paths = [Path(arg) for arg in sys.argv[1:]]
    missing = [p for p in paths if not p.exists()]
    if missing:
        logger.error(f"Input file(s) not found: {', '.join(str(p) for p in missing)}")
        sys.exit(2)

    counts = run_files(paths)
    logger.info(f"Normalization completed: {counts}")

    # Exit with error code if any payload or file was rejected
    if counts["unrecognized"] or counts["invalid_files"]:
        sys.exit(1)

    return counts


if __name__ == "__main__":
    main()
