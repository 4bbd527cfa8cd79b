"""Catalog overview: item counts per collection and per category label."""
import asyncio
from collections import Counter
from typing import Any, Dict, Iterable

from interfacedesign.services.collection import CATEGORIES, category_label, load_category
from interfacedesign.services.discovery import load_process_chains, load_processes
from interfacedesign.services.xml_loader import PathLike


def _counts(labels: Iterable[str]) -> Dict[str, int]:
    return dict(Counter(labels))


async def get_overview(base_path: PathLike) -> Dict[str, Any]:
    """Counts for all collections, loaded concurrently.

    Absent directories contribute ``{"count": 0, "categories": {}}``.
    """
    results = await asyncio.gather(
        *(load_category(base_path, category) for category in CATEGORIES),
        load_processes(base_path),
        load_process_chains(base_path),
    )
    *collections, processes, chains = results

    overview: Dict[str, Any] = {}
    for category, items in zip(CATEGORIES, collections):
        overview[category] = {
            "count": len(items),
            "categories": _counts(category_label(item) for item in items),
        }

    overview["processes"] = {
        "count": len(processes),
        "categories": _counts(p.actor for p in processes),
        "byDiagramType": _counts(p.diagram_type for p in processes),
    }
    overview["processchains"] = {
        "count": len(chains),
        "categories": _counts(c.folder for c in chains),
    }
    return overview
