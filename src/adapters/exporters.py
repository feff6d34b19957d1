"""JSON/CSV rendering of results.

Why JSON/CSV:
- Interoperability with scripts and CI pipelines.
- The core returns structured models; this module only serializes them.
"""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path
from typing import Any, Iterable, Sequence

from pydantic import BaseModel

from core.domain.models import ListingGroup

LISTING_FIELDS = ("key", "network", "contract", "address")


def to_payload(value: Any) -> Any:
    """Convert models (or lists/dicts of models) into JSON-ready data."""

    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {str(k): to_payload(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_payload(v) for v in value]
    return value


def render_json(value: Any) -> str:
    """Stable, UTF-8 friendly JSON."""

    return json.dumps(to_payload(value), ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def render_csv(rows: Iterable[dict[str, Any]], fieldnames: Sequence[str]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(fieldnames), lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({name: "" if row.get(name) is None else row.get(name) for name in fieldnames})
    return buffer.getvalue()


def listing_rows(groups: Iterable[ListingGroup]) -> list[dict[str, Any]]:
    return [
        {
            "key": group.key,
            "network": entry.network,
            "contract": entry.contract,
            "address": entry.address,
        }
        for group in groups
        for entry in group.entries
    ]


def render_listing_json(groups: list[ListingGroup]) -> str:
    payload = {
        group.key: [
            {"network": e.network, "contract": e.contract, "address": e.address}
            for e in group.entries
        ]
        for group in groups
    }
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def render_listing_csv(groups: list[ListingGroup]) -> str:
    return render_csv(listing_rows(groups), LISTING_FIELDS)


def write_output(*, text: str, output_path: Path) -> Path:
    """Write rendered output to `output_path` (UTF-8), creating parent dirs."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    return output_path
