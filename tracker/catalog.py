import json
import logging
import math
from typing import Dict, Tuple

from tracker.domain import CategoryDefinition

logger = logging.getLogger(__name__)

Catalog = Tuple[CategoryDefinition, ...]

DEFAULT_CATALOG: Catalog = (
    CategoryDefinition("food", "food", "#FF6B6B", 500, "Food & Dining", "🍔"),
    CategoryDefinition("rent", "rent", "#4ECDC4", 1200, "Rent & Bills", "🏠"),
    CategoryDefinition("travel", "travel", "#45B7D1", 300, "Travel", "✈️"),
    CategoryDefinition("entertainment", "entertainment", "#FFA07A", 200, "Entertainment", "🎮"),
    CategoryDefinition("shopping", "shopping", "#98D8C8", 400, "Shopping", "🛍️"),
    CategoryDefinition("healthcare", "healthcare", "#F7DC6F", 150, "Healthcare", "💊"),
    CategoryDefinition("education", "education", "#BB8FCE", 250, "Education", "📚"),
    CategoryDefinition("other", "other", "#85929E", 200, "Other", "📦"),
)


def load_catalog(path: str) -> Catalog:
    """Read a catalog from a JSON file of the form {"categories": [...]}.

    Each entry needs key, label, color and monthly_budget; title and icon are
    optional. Order in the file is the catalog order.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    catalog = tuple(_parse_category(c) for c in data["categories"])
    keys = [c.key for c in catalog]
    duplicates = sorted({k for k in keys if keys.count(k) > 1})
    if duplicates:
        raise ValueError(f"Duplicate category keys in {path}: {', '.join(duplicates)}")
    if not catalog:
        raise ValueError(f"Catalog {path} defines no categories")

    logger.info("Loaded %d categories from %s", len(catalog), path)
    return catalog


def _parse_category(raw: dict) -> CategoryDefinition:
    missing = [f for f in ("key", "label", "color", "monthly_budget") if f not in raw]
    if missing:
        raise ValueError(f"Category entry {raw!r} is missing {', '.join(missing)}")

    budget = float(raw["monthly_budget"])
    if not math.isfinite(budget) or budget <= 0:
        raise ValueError(f"Category {raw['key']} must have a finite positive monthly_budget")

    return CategoryDefinition(
        key=str(raw["key"]),
        label=str(raw["label"]),
        color=str(raw["color"]),
        monthly_budget=budget,
        title=str(raw.get("title", raw["label"])),
        icon=str(raw.get("icon", "")),
    )


def catalog_keys(catalog: Catalog) -> Tuple[str, ...]:
    return tuple(c.key for c in catalog)


def categories_by_key(catalog: Catalog) -> Dict[str, CategoryDefinition]:
    return {c.key: c for c in catalog}
