"""Normalizer for enumeration documents (``<enum>`` root)."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from interfacedesign.services.multilang import MultilingualText, resolve, resolve_category
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
    to_int,
)

ROOT_ELEMENT = "enum"


@dataclass(frozen=True)
class EnumSummary(CatalogRecord):
    """List-view form of an enumeration."""
    id: str
    name: str = ""
    category: MultilingualText = field(default_factory=dict)
    description: MultilingualText = field(default_factory=dict)
    values: List[Dict[str, Any]] = field(default_factory=list)
    value_count: int = 0
    file_path: str = ""


@dataclass(frozen=True)
class EnumDetail(EnumSummary):
    """Single-item form of an enumeration."""
    german_text: str = ""
    type_info: Optional[Dict[str, str]] = None
    constraints: List[Dict[str, Any]] = field(default_factory=list)
    usage_context: str = ""
    related_enumerations: List[str] = field(default_factory=list)
    notes: List[MultilingualText] = field(default_factory=list)
    version: str = ""
    last_modified: str = ""


def _value(node: Any, detail: bool) -> Dict[str, Any]:
    value = {
        "name": first_text(node, "n", "name"),
        "numericValue": to_int(child(node, "numericValue"), None),
        "hexValue": first_text(node, "hexValue"),
        "description": resolve(child(node, "description")),
    }
    if detail:
        value.update(
            germanText=first_text(node, "germanText"),
            usage=first_text(node, "usage"),
            deprecated=is_true(child(node, "deprecated")),
            since=first_text(node, "since"),
        )
    return value


def _type_info(node: Any) -> Optional[Dict[str, str]]:
    if node is None:
        return None
    return {
        "asn1Type": first_text(node, "asn1Type"),
        "javaType": first_text(node, "javaType"),
        "cType": first_text(node, "cType"),
        "encoding": first_text(node, "encoding"),
    }


def parse_constraints(node: Dict[str, Any]) -> List[Dict[str, Any]]:
    """``<constraints><constraint type="..">..</constraint></constraints>``."""
    return [
        {
            "type": first_text(c, "type"),
            "description": resolve(child(c, "description") or text_of(c)),
        }
        for c in children(node, "constraints", "constraint")
    ]


def _summary_fields(enum: Dict[str, Any], file_path: PathLike, detail: bool) -> Dict[str, Any]:
    values = [_value(v, detail) for v in children(enum, "values", "value")]
    return {
        "id": first_text(enum, "id", "n", "name") or Path(file_path).stem,
        "name": first_text(enum, "n", "name"),
        "category": resolve_category(enum.get("category")),
        "description": resolve(enum.get("description")),
        "values": values,
        "value_count": len(values),
        "file_path": str(file_path),
    }


def parse_enum(file_path: PathLike) -> Optional[EnumSummary]:
    """Summary of an enum document, ``None`` if it is not one."""
    enum = root_node(parse_xml_file(file_path), ROOT_ELEMENT)
    if enum is None:
        return None
    return EnumSummary(**_summary_fields(enum, file_path, detail=False))


def parse_enum_detail(file_path: PathLike) -> Optional[EnumDetail]:
    """Full enum record including type info and constraints."""
    enum = root_node(parse_xml_file(file_path), ROOT_ELEMENT)
    if enum is None:
        return None
    return EnumDetail(
        german_text=first_text(enum, "germanText"),
        type_info=_type_info(enum.get("typeInfo")),
        constraints=parse_constraints(enum),
        usage_context=first_text(enum, "usageContext"),
        related_enumerations=[
            first_text(e, "name", "n") or text_of(e)
            for e in children(enum, "relatedEnumerations", "enumeration")
        ],
        notes=[resolve(n) for n in as_list(enum.get("note"))],
        version=first_text(enum, "version"),
        last_modified=first_text(enum, "lastModified"),
        **_summary_fields(enum, file_path, detail=True),
    )
