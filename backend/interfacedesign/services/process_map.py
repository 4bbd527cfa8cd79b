"""Process map (``processes/map.xml``): categories, critical processes, navigation."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from interfacedesign.services.multilang import MultilingualText, resolve, resolve_optional
from interfacedesign.services.records import CatalogRecord
from interfacedesign.services.xml_loader import (
    PathLike,
    as_list,
    child,
    children,
    first_text,
    is_true,
    parse_xml_file,
    root_node,
    text_of,
)

ROOT_ELEMENT = "processMap"
MAP_FILE = Path("processes") / "map.xml"
DEFAULT_COLOR = "#888888"


@dataclass(frozen=True)
class ProcessMap(CatalogRecord):
    metadata: Dict[str, Any] = field(default_factory=dict)
    categories: List[Dict[str, Any]] = field(default_factory=list)
    critical_processes: List[Dict[str, Any]] = field(default_factory=list)
    navigation: Dict[str, Any] = field(default_factory=dict)


def _name(node: Any) -> MultilingualText:
    if not isinstance(node, dict):
        return resolve(None)
    value = node.get("n")
    return resolve(value if value is not None else node.get("name"))


def _metadata(node: Any) -> Dict[str, Any]:
    return {
        "title": resolve(child(node, "title")),
        "version": first_text(node, "version"),
        "date": first_text(node, "date"),
        "description": resolve(child(node, "description")),
        "standards": [text_of(s) for s in children(node, "standards", "standard")],
    }


def _process_entry(node: Any) -> Dict[str, Any]:
    return {
        "id": first_text(node, "id"),
        "name": _name(node),
        "mandatory": is_true(child(node, "mandatory")),
        "critical": is_true(child(node, "critical")),
        "frequency": resolve_optional(child(node, "frequency")),
    }


def _sub_category(node: Any) -> Dict[str, Any]:
    return {
        "id": first_text(node, "id"),
        "name": _name(node),
        "processes": [_process_entry(p) for p in children(node, "processes", "process")],
        "processChains": [
            {"id": first_text(c, "id"), "name": _name(c)}
            for c in children(node, "processChains", "processChain")
        ],
    }


def _category(node: Any) -> Dict[str, Any]:
    return {
        "id": first_text(node, "id"),
        "name": _name(node),
        "description": resolve(child(node, "description")),
        "icon": first_text(node, "icon"),
        "color": first_text(node, "color") or DEFAULT_COLOR,
        "subCategories": [
            _sub_category(s) for s in children(node, "subCategories", "subCategory")
        ],
    }


def _learning_path(node: Any) -> Dict[str, Any]:
    return {
        "name": _name(node),
        "targetAudience": resolve(child(node, "targetAudience")),
        "steps": [
            {"id": first_text(s, "id"), "description": resolve(child(s, "description"))}
            for s in children(node, "steps", "step")
        ],
    }


def _navigation(node: Any) -> Dict[str, Any]:
    return {
        "startingPoints": [
            {
                "role": resolve(child(s, "role")),
                "start": first_text(s, "start"),
                "description": resolve(child(s, "description")),
            }
            for s in children(node, "recommendedStartingPoints", "startingPoint")
        ],
        "learningPaths": [
            _learning_path(p) for p in children(node, "learningPaths", "learningPath")
        ],
    }


def parse_process_map(base_path: PathLike) -> Optional[ProcessMap]:
    """Process map of a catalog, ``None`` when missing or not a ``processMap``."""
    node = root_node(parse_xml_file(Path(base_path) / MAP_FILE), ROOT_ELEMENT)
    if node is None:
        return None
    return ProcessMap(
        metadata=_metadata(node.get("metadata")),
        categories=[_category(c) for c in children(node, "mainCategories", "category")],
        critical_processes=[
            {
                "id": first_text(p, "id"),
                "name": _name(p),
                "reason": resolve(child(p, "reason")),
                "severity": resolve(child(p, "severity")),
            }
            for p in as_list(child(node, "criticalProcesses", "process"))
        ],
        navigation=_navigation(node.get("navigation")),
    )
