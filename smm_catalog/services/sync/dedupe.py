from __future__ import annotations

from typing import Iterable


def normalize_service_ids(ids: Iterable[str | int]) -> list[str]:
    """Stringify and de-duplicate selected service ids, keeping first-seen order."""
    seen: set[str] = set()
    out: list[str] = []
    for raw in ids:
        key = str(raw).strip()
        if key and key not in seen:
            seen.add(key)
            out.append(key)
    return out
