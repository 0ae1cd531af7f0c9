"""Reshape raw DataForSEO payloads into SearchResultItem lists."""

from typing import Any

from searchchat.models import SearchResultItem


def extract_items(payload: Any) -> list[Any]:
    """Return ``tasks[0].result[0].items`` or an empty list if any hop is missing."""
    node = payload
    for key in ("tasks", "result"):
        if not isinstance(node, dict):
            return []
        seq = node.get(key)
        if not isinstance(seq, list) or not seq:
            return []
        node = seq[0]
    if not isinstance(node, dict):
        return []
    items = node.get("items")
    return items if isinstance(items, list) else []


# Result field -> raw item key. Keys absent from the raw item stay unset so
# they are left out of the serialized context, while explicit nulls are kept.
_FIELD_KEYS = {
    "type": "type",
    "title": "title",
    "link": "url",
    "snippet": "description",
    "channel": "website_name",
}


def normalize_item(item: dict[str, Any]) -> SearchResultItem:
    fields: dict[str, Any] = {
        name: item[key] for name, key in _FIELD_KEYS.items() if key in item
    }
    images = item.get("images")
    first = images[0] if isinstance(images, list) and images else None
    if isinstance(first, dict) and "url" in first:
        fields["image"] = first["url"]
    timestamp = item.get("timestamp")
    if isinstance(timestamp, str):
        # "2024-01-01 00:00:00" -> "2024-01-01"
        fields["date"] = timestamp.split(" ")[0]
    return SearchResultItem(**fields)


def normalize_results(payload: Any) -> list[SearchResultItem]:
    """Normalize every dict item in the payload, skipping anything else."""
    return [normalize_item(item) for item in extract_items(payload) if isinstance(item, dict)]
