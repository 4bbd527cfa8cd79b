"""Normalizer for data type documents.

Type documents come with one of several roots (``type``, ``resultType``,
``eventData``, or anything else for older files). The root is picked first,
then a single decoder handles the fields shared by all variants.
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from interfacedesign.services.enum_parser import parse_constraints
from interfacedesign.services.multilang import (
    UNCATEGORIZED,
    MultilingualText,
    resolve,
    resolve_category,
)
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
)

TYPE_ROOTS = ("type", "resultType", "eventData")

# Name suffix -> category, checked in order.
CATEGORY_SUFFIXES = (
    ("EventData", "EventData"),
    ("Result", "Result"),
    ("Set", "Set"),
)


class TypeKind(str, Enum):
    """Structural kind of a type document."""
    RESULT = "result"
    SIMPLE = "simple"
    EVENT_DATA = "eventData"
    COMPLEX = "complex"


@dataclass(frozen=True)
class TypeSummary(CatalogRecord):
    """List-view form of a data type."""
    id: str
    name: str = ""
    category: MultilingualText = field(default_factory=dict)
    description: MultilingualText = field(default_factory=dict)
    fields: List[Dict[str, Any]] = field(default_factory=list)
    field_count: int = 0
    root_element: str = ""
    file_path: str = ""


@dataclass(frozen=True)
class TypeDetail(TypeSummary):
    """Single-item form of a data type."""
    base_type: str = ""
    asn1_definition: str = ""
    usage: str = ""
    constraints: List[Dict[str, Any]] = field(default_factory=list)
    notes: List[MultilingualText] = field(default_factory=list)
    type_kind: str = TypeKind.COMPLEX.value
    source: str = ""


def select_root(document: Optional[Dict[str, Any]]) -> Optional[Tuple[str, Dict[str, Any]]]:
    """Pick the type root: known roots in priority order, else the first key."""
    if not document:
        return None
    for name in TYPE_ROOTS:
        node = root_node(document, name)
        if node is not None:
            return name, node
    name = next(iter(document))
    node = root_node(document, name)
    if node is None:
        return None
    return name, node


def category_from_name(name: str) -> str:
    for suffix, category in CATEGORY_SUFFIXES:
        if name.endswith(suffix):
            return category
    return UNCATEGORIZED


def type_kind(root_element: str, node: Dict[str, Any], name: str) -> TypeKind:
    if root_element == "resultType":
        return TypeKind.RESULT
    if node.get("baseType"):
        return TypeKind.SIMPLE
    if name.endswith("EventData"):
        return TypeKind.EVENT_DATA
    return TypeKind.COMPLEX


def _field(node: Any, detail: bool) -> Dict[str, Any]:
    result = {
        "name": first_text(node, "n", "name"),
        "type": first_text(node, "type"),
        "description": resolve(child(node, "description")),
        "required": is_true(child(node, "required")),
    }
    if detail:
        result.update(
            optional=is_true(child(node, "optional")),
            getter=first_text(node, "getter"),
            setter=first_text(node, "setter"),
            defaultValue=first_text(node, "defaultValue", "default"),
        )
    return result


def _summary_fields(
    root_element: str,
    node: Dict[str, Any],
    file_path: PathLike,
    detail: bool,
) -> Dict[str, Any]:
    name = first_text(node, "n", "name") or Path(file_path).stem
    explicit_category = node.get("category")
    fields = [_field(f, detail) for f in children(node, "fields", "field")]
    return {
        "id": first_text(node, "id") or name,
        "name": name,
        "category": (
            resolve_category(explicit_category)
            if explicit_category
            else resolve(category_from_name(name))
        ),
        "description": resolve(node.get("description")),
        "fields": fields,
        "field_count": len(fields),
        "root_element": root_element,
        "file_path": str(file_path),
    }


def parse_type(file_path: PathLike) -> Optional[TypeSummary]:
    """Summary of a type document, ``None`` if the file has no usable root."""
    selected = select_root(parse_xml_file(file_path))
    if selected is None:
        return None
    root_element, node = selected
    return TypeSummary(**_summary_fields(root_element, node, file_path, detail=False))


def parse_type_detail(file_path: PathLike) -> Optional[TypeDetail]:
    """Full type record including constraints and the derived type kind."""
    selected = select_root(parse_xml_file(file_path))
    if selected is None:
        return None
    root_element, node = selected
    summary = _summary_fields(root_element, node, file_path, detail=True)
    return TypeDetail(
        base_type=first_text(node, "baseType"),
        asn1_definition=first_text(node, "asn1Definition"),
        usage=first_text(node, "usage"),
        constraints=parse_constraints(node),
        notes=[resolve(n) for n in as_list(node.get("note"))],
        type_kind=type_kind(root_element, node, summary["name"]).value,
        source=first_text(node, "source"),
        **summary,
    )
