"""Deterministic offer fingerprint used as the dedupe key."""

from __future__ import annotations

import hashlib
import json
from datetime import datetime, timezone
from typing import Optional

RFC3339_UTC = "%Y-%m-%dT%H:%M:%SZ"


def format_rfc3339(value: Optional[datetime]) -> str:
    """Whole-second RFC3339 in UTC; empty string for an unknown time."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(RFC3339_UTC)


def canonical_id(
    provider_id: str,
    provider_ref: str,
    price: float,
    depart_at: Optional[datetime],
) -> str:
    """Hash provider, provider ref, price (2 decimals) and departure into a hex id.

    Fields are encoded as a JSON array so a separator inside one value cannot
    shift bytes into the next. Non-ASCII text is escaped, so lone surrogates
    hash like any other character. Not a security boundary.
    """
    fields = [provider_id, provider_ref, f"{price:.2f}", format_rfc3339(depart_at)]
    payload = json.dumps(fields, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
