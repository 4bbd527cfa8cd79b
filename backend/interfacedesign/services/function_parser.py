"""Normalizer for interface function documents (``<function>`` root)."""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from interfacedesign.services.multilang import (
    DEFAULT_KEY,
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
    text_of,
    to_int,
)

ROOT_ELEMENT = "function"


class ParameterDirection(str, Enum):
    """Direction of a function parameter."""
    INPUT = "INPUT"
    OUTPUT = "OUTPUT"
    INOUT = "INOUT"


_DIRECTION_ALIASES = {
    "IN": ParameterDirection.INPUT,
    "INPUT": ParameterDirection.INPUT,
    "OUT": ParameterDirection.OUTPUT,
    "OUTPUT": ParameterDirection.OUTPUT,
    "INOUT": ParameterDirection.INOUT,
    "IN_OUT": ParameterDirection.INOUT,
    "IN/OUT": ParameterDirection.INOUT,
    "IN-OUT": ParameterDirection.INOUT,
}


@dataclass(frozen=True)
class FunctionSummary(CatalogRecord):
    """List-view form of an interface function."""
    id: str
    name: str = ""
    category: MultilingualText = field(default_factory=dict)
    description: MultilingualText = field(default_factory=dict)
    parameters: List[Dict[str, Any]] = field(default_factory=list)
    parameter_count: int = 0
    return_value: Dict[str, Any] = field(default_factory=dict)
    exceptions: List[str] = field(default_factory=list)
    exception_count: int = 0
    step_count: int = 0
    has_system_log: bool = False
    file_path: str = ""


@dataclass(frozen=True)
class FunctionDetail(FunctionSummary):
    """Single-item form of an interface function."""
    detailed_steps: List[Dict[str, Any]] = field(default_factory=list)
    precondition: MultilingualText = field(default_factory=dict)
    postcondition: MultilingualText = field(default_factory=dict)
    notes: List[Dict[str, Any]] = field(default_factory=list)
    overloads: List[Dict[str, Any]] = field(default_factory=list)
    overload_count: int = 0
    mutual_exclusions: List[MultilingualText] = field(default_factory=list)
    system_log: Optional[Dict[str, Any]] = None
    transaction_log: Optional[Dict[str, Any]] = None


def normalize_direction(value: Any) -> str:
    """Map direction spellings onto INPUT/OUTPUT/INOUT, keep unknown ones."""
    text = text_of(value).strip()
    if not text:
        return ParameterDirection.INPUT.value
    direction = _DIRECTION_ALIASES.get(text.upper())
    return direction.value if direction else text


def _parameter(node: Any, detail: bool) -> Dict[str, Any]:
    parameter = {
        "name": first_text(node, "n", "name"),
        "type": first_text(node, "type"),
        "description": resolve(child(node, "description")),
        "direction": normalize_direction(child(node, "direction")),
        "required": is_true(child(node, "required")),
    }
    if detail:
        parameter["defaultValue"] = first_text(node, "defaultValue")
    return parameter


def _return_value(func: Dict[str, Any]) -> Dict[str, Any]:
    node = func.get("returnValue")
    if node is None:
        return {"type": "void", "description": {DEFAULT_KEY: ""}}
    return {
        "type": first_text(node, "type") or "void",
        "description": resolve(child(node, "description")),
    }


def _exception_name(node: Any) -> str:
    return first_text(node, "name", "n") or text_of(node)


def _standard_step(node: Any) -> Optional[Dict[str, Any]]:
    if node is None:
        return None
    return {
        "number": to_int(child(node, "number"), None) or None,
        "shortCommand": resolve(node, "shortCommand"),
    }


def _step_description(step: Any) -> MultilingualText:
    description = resolve(child(step, "description"))
    if description[DEFAULT_KEY]:
        return description

    # Legacy documents carry originalText (en) / germanText (de) instead.
    original = first_text(step, "originalText")
    german = first_text(step, "germanText")
    if not (original or german):
        return description
    return {
        DEFAULT_KEY: german or original,
        "de": german or original,
        "en": original or german,
    }


def _step(step: Any) -> Dict[str, Any]:
    return {
        "number": to_int(child(step, "number"), 0),
        "standardStep": _standard_step(child(step, "standardStep")),
        "description": _step_description(step),
        "pseudocode": resolve(child(step, "pseudocode")),
        "originalText": first_text(step, "originalText"),
        "germanText": first_text(step, "germanText"),
        "errorCases": [
            {
                "exception": first_text(case, "exception"),
                "trigger": resolve(child(case, "trigger")),
                "action": resolve(child(case, "action")),
            }
            for case in as_list(child(step, "errorCase"))
        ],
        "successCases": [
            {
                "condition": resolve(child(case, "condition")),
                "action": resolve(child(case, "action")),
            }
            for case in as_list(child(step, "successCase"))
        ],
    }


def parse_steps(func: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Detailed steps, numerically ordered regardless of file order."""
    steps = [_step(step) for step in children(func, "detailedSteps", "step")]
    steps.sort(key=lambda s: s["number"])
    return steps


def _notes(func: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [
        {"text": resolve(note), "type": first_text(note, "type")}
        for note in as_list(func.get("note"))
    ]


def _log_fields(structure: Any) -> List[Dict[str, Any]]:
    return [
        {
            "name": first_text(f, "n", "name"),
            "type": first_text(f, "type"),
            "tag": first_text(f, "tag"),
            "required": is_true(child(f, "required")),
            "defaultValue": first_text(f, "defaultValue"),
            "description": resolve(child(f, "description")),
            "note": first_text(f, "note"),
            "origin": first_text(f, "origin"),
        }
        for f in as_list(child(structure, "field"))
    ]


def _log(node: Any, default_type: str, message_key: str) -> Optional[Dict[str, Any]]:
    if node is None:
        return None
    asn1 = child(node, "asn1Structure")
    return {
        "logType": first_text(node, "logType") or default_type,
        "requirement": first_text(node, "requirement"),
        "asn1Structure": {
            "text": text_of(asn1),
            "logMessage": first_text(asn1, "logMessage"),
            message_key: first_text(asn1, message_key),
        } if asn1 is not None else None,
        "fields": _log_fields(child(node, "structure")),
    }


def _overload(node: Any) -> Dict[str, Any]:
    note = child(node, "note")
    return {
        "id": first_text(node, "id"),
        "signature": first_text(node, "signature"),
        "description": resolve(child(node, "description")),
        "parameters": children(node, "parameters", "param"),
        "note": resolve(note) if note is not None else None,
    }


def _summary_fields(func: Dict[str, Any], file_path: PathLike, detail: bool) -> Dict[str, Any]:
    parameters = [_parameter(p, detail) for p in children(func, "parameters", "parameter")]
    exceptions = [_exception_name(e) for e in children(func, "exceptions", "exception")]
    return {
        "id": first_text(func, "id", "n", "name") or Path(file_path).stem,
        "name": first_text(func, "n", "name"),
        "category": resolve_category(func.get("category")),
        "description": resolve(func.get("description")),
        "parameters": parameters,
        "parameter_count": len(parameters),
        "return_value": _return_value(func),
        "exceptions": exceptions,
        "exception_count": len(exceptions),
        "has_system_log": func.get("systemLog") is not None,
        "file_path": str(file_path),
    }


def parse_function(file_path: PathLike) -> Optional[FunctionSummary]:
    """Summary of a function document, ``None`` if it is not one."""
    func = root_node(parse_xml_file(file_path), ROOT_ELEMENT)
    if func is None:
        return None
    return FunctionSummary(
        step_count=len(children(func, "detailedSteps", "step")),
        **_summary_fields(func, file_path, detail=False),
    )


def parse_function_detail(file_path: PathLike) -> Optional[FunctionDetail]:
    """Full function record including steps, logs and overloads."""
    func = root_node(parse_xml_file(file_path), ROOT_ELEMENT)
    if func is None:
        return None

    steps = parse_steps(func)
    overloads = [_overload(o) for o in children(func, "overloads", "overload")]
    return FunctionDetail(
        step_count=len(steps),
        detailed_steps=steps,
        precondition=resolve(func.get("precondition")),
        postcondition=resolve(func.get("postcondition")),
        notes=_notes(func),
        overloads=overloads,
        overload_count=len(overloads),
        mutual_exclusions=[
            resolve(ex) for ex in children(func, "mutualExclusions", "exclusion")
        ],
        system_log=_log(func.get("systemLog"), "system", "systemLogMessage"),
        transaction_log=_log(
            func.get("transactionLog"), "transaction-log", "transactionLogMessage"
        ),
        **_summary_fields(func, file_path, detail=True),
    )
