"""Normalizer for exception documents (``<exception>`` root)."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from interfacedesign.services.multilang import (
    MultilingualText,
    plain_text,
    resolve,
    resolve_category,
)
from interfacedesign.services.records import CatalogRecord
from interfacedesign.services.xml_loader import (
    TEXT_KEY,
    PathLike,
    as_list,
    child,
    children,
    first_text,
    parse_xml_file,
    root_node,
    text_of,
)

ROOT_ELEMENT = "exception"
DEFAULT_SEVERITY = "Medium"
RELATED_SEPARATOR = " - "


@dataclass(frozen=True)
class ExceptionSummary(CatalogRecord):
    """List-view form of an exception."""
    id: str
    name: str = ""
    category: MultilingualText = field(default_factory=dict)
    severity: str = DEFAULT_SEVERITY
    description: MultilingualText = field(default_factory=dict)
    javadoc: Optional[Dict[str, Any]] = None
    specification: Optional[Dict[str, Any]] = None
    thrown_by: List[str] = field(default_factory=list)
    thrown_by_count: int = 0
    file_path: str = ""


@dataclass(frozen=True)
class ExceptionDetail(ExceptionSummary):
    """Single-item form of an exception."""
    subcategory: MultilingualText = field(default_factory=dict)
    related_exceptions: List[Dict[str, Any]] = field(default_factory=list)
    trigger_conditions: List[Dict[str, MultilingualText]] = field(default_factory=list)
    execution_sequence: List[Dict[str, Any]] = field(default_factory=list)
    postconditionality: List[Dict[str, Any]] = field(default_factory=list)
    recovery: Optional[Dict[str, Any]] = None
    usage: List[Dict[str, Any]] = field(default_factory=list)
    implementation_context: List[MultilingualText] = field(default_factory=list)
    example: str = ""
    notes: List[MultilingualText] = field(default_factory=list)


def _content(node: Any, key: str = "description") -> Any:
    """The ``key`` child of a node, else its own text or tagged children."""
    if isinstance(node, dict):
        value = node.get(key)
        if value is not None:
            return value
        if node.get(TEXT_KEY):
            return node[TEXT_KEY]
    return node


def parse_related_exception(node: Any) -> Dict[str, Any]:
    """Related exception from a structured node or a ``"Name - text"`` string."""
    if isinstance(node, str):
        name, _, description = node.partition(RELATED_SEPARATOR)
        return {"name": name.strip(), "description": resolve(description.strip())}
    return {
        "name": first_text(node, "name", "n"),
        "description": resolve(_content(node)),
    }


def _thrown_by(exc: Dict[str, Any]) -> List[str]:
    return [
        first_text(f, "name", "n") or text_of(f)
        for f in children(exc, "thrownBy", "function")
    ]


def _summary_javadoc(node: Any) -> Optional[Dict[str, Any]]:
    if node is None:
        return None
    return {"summary": resolve(child(node, "summary"))}


def _summary_specification(node: Any) -> Optional[Dict[str, Any]]:
    if node is None:
        return None
    return {
        "source": first_text(node, "source"),
        "requirement": resolve(child(node, "requirement")),
    }


def _constructor(node: Any) -> Dict[str, Any]:
    return {
        "signature": first_text(node, "signature"),
        "description": resolve(child(node, "description")),
        "parameters": [
            {"name": first_text(p, "name"), "description": resolve(_content(p))}
            for p in as_list(child(node, "parameter"))
        ],
    }


def _javadoc(node: Any) -> Optional[Dict[str, Any]]:
    if node is None:
        return None
    constructors = [
        c for c in children(node, "constructors", "constructor")
        if first_text(c, "signature")
    ]
    return {
        "summary": resolve(child(node, "summary")),
        "description": resolve(child(node, "description")),
        "throws": [text_of(t) for t in as_list(child(node, "throws"))],
        "constructors": [_constructor(c) for c in constructors],
        "since": first_text(node, "since"),
        "author": first_text(node, "author"),
    }


def _specification(node: Any) -> Optional[Dict[str, Any]]:
    if node is None:
        return None
    return {
        "source": first_text(node, "source"),
        "section": first_text(node, "section"),
        "requirement": resolve(child(node, "requirement")),
        "applicability": resolve(child(node, "applicability")),
        "references": as_list(child(node, "reference")),
    }


def _recovery(node: Any) -> Optional[Dict[str, Any]]:
    # Repeated <recovery> elements: the first one wins
    if isinstance(node, list):
        node = node[0] if node else None
    if node is None:
        return None
    if isinstance(node, str):
        return {"description": resolve(node)}
    return {
        "description": resolve(node.get("description")),
        "action": resolve(node.get("action")),
        "alternativePath": resolve(node.get("alternativePath")),
        "steps": [resolve(s) for s in as_list(node.get("step"))],
    }


def _usage_scenario(node: Any) -> Dict[str, Any]:
    return {
        "name": first_text(node, "name"),
        "description": resolve(child(node, "description")),
        "example": plain_text(child(node, "example")),
        "relatedFunctions": plain_text(child(node, "relatedFunctions")),
        "errorContext": resolve(child(node, "errorContext")),
    }


def _notes(exc: Dict[str, Any]) -> List[MultilingualText]:
    notes = as_list(exc.get("note")) or children(exc, "notes", "note")
    return [resolve(n) for n in notes]


def _summary_fields(exc: Dict[str, Any], file_path: PathLike) -> Dict[str, Any]:
    thrown_by = _thrown_by(exc)
    return {
        "id": first_text(exc, "id", "n", "name") or Path(file_path).stem,
        "name": first_text(exc, "n", "name"),
        "category": resolve_category(exc.get("category")),
        "severity": first_text(exc, "severity") or DEFAULT_SEVERITY,
        "description": resolve(exc.get("description")),
        "thrown_by": thrown_by,
        "thrown_by_count": len(thrown_by),
        "file_path": str(file_path),
    }


def parse_exception(file_path: PathLike) -> Optional[ExceptionSummary]:
    """Summary of an exception document, ``None`` if it is not one."""
    exc = root_node(parse_xml_file(file_path), ROOT_ELEMENT)
    if exc is None:
        return None
    return ExceptionSummary(
        javadoc=_summary_javadoc(exc.get("javadoc")),
        specification=_summary_specification(exc.get("specification")),
        **_summary_fields(exc, file_path),
    )


def parse_exception_detail(file_path: PathLike) -> Optional[ExceptionDetail]:
    """Full exception record including recovery and usage scenarios."""
    exc = root_node(parse_xml_file(file_path), ROOT_ELEMENT)
    if exc is None:
        return None
    return ExceptionDetail(
        javadoc=_javadoc(exc.get("javadoc")),
        specification=_specification(exc.get("specification")),
        subcategory=resolve(exc.get("subcategory")),
        related_exceptions=[
            parse_related_exception(e)
            for e in children(exc, "relatedExceptions", "exception")
        ],
        trigger_conditions=[
            {
                "scenario": resolve(child(c, "scenario")),
                "description": resolve(child(c, "description")),
                "trigger": resolve(child(c, "trigger")),
                "action": resolve(child(c, "action")),
            }
            for c in children(exc, "triggerConditions", "condition")
        ],
        execution_sequence=[
            {
                "number": first_text(s, "number"),
                "name": first_text(s, "name"),
                "description": resolve(_content(s)),
            }
            for s in children(exc, "executionSequence", "step")
        ],
        postconditionality=[
            {"name": first_text(s, "name"), "description": resolve(_content(s))}
            for s in children(exc, "postconditionality", "state")
        ],
        recovery=_recovery(exc.get("recovery")),
        usage=[_usage_scenario(s) for s in children(exc, "usage", "scenario")],
        implementation_context=[
            resolve(n) for n in children(exc, "implementationContext", "note")
        ],
        example=plain_text(exc.get("example")),
        notes=_notes(exc),
        **_summary_fields(exc, file_path),
    )
