"""Normalizers for process and process chain documents.

Processes live under ``processes/<actor>/<flow|sequenz>/<id>.xml``; actor and
diagram type come from the folder and are passed in by the caller. Chains live
under ``processes/<folder>/<id>.xml`` with a ``processChain`` root. Both may
have Mermaid diagram sources next to them (``<id>_<lang>.mermaid``).
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from interfacedesign.core.config import settings
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

logger = logging.getLogger(__name__)

PROCESS_ROOT = "process"
PROCESS_CHAIN_ROOT = "processChain"
DIAGRAM_SUFFIX = ".mermaid"


def read_diagram_sources(
    xml_path: PathLike,
    languages: Optional[Sequence[str]] = None,
) -> Dict[str, str]:
    """Mermaid source per language for the XML file at ``xml_path``.

    Looks for ``<base>_<lang>.mermaid``; the first language also accepts the
    legacy ``<base>.mermaid``. Languages without a file get the content of
    the first language that has one, or ``""``.
    """
    xml_path = Path(xml_path)
    languages = tuple(languages or settings.SUPPORTED_LANGUAGES)
    base = xml_path.with_suffix("")

    content: Dict[str, str] = {}
    for index, lang in enumerate(languages):
        candidates = [base.with_name(f"{base.name}_{lang}{DIAGRAM_SUFFIX}")]
        if index == 0:
            candidates.append(base.with_name(f"{base.name}{DIAGRAM_SUFFIX}"))
        content[lang] = ""
        for candidate in candidates:
            try:
                content[lang] = candidate.read_text(encoding="utf-8")
                break
            except OSError:
                continue
        if not content[lang]:
            logger.debug("No %s diagram source for %s", lang, xml_path.name)

    available = [text for text in content.values() if text]
    if available:
        for lang in languages:
            content[lang] = content[lang] or available[0]
    return content


def _names(node: Any, container: str, item: str) -> List[str]:
    return [first_text(n, "name", "n") or text_of(n) for n in children(node, container, item)]


def _parameters(node: Any, container: str) -> List[Dict[str, Any]]:
    return [
        {
            "name": first_text(p, "name", "n"),
            "type": first_text(p, "type"),
            "description": resolve(child(p, "description")),
        }
        for p in children(node, container, "parameter")
    ]


def _name(node: Any) -> MultilingualText:
    """Name from ``name`` or the legacy ``n`` element."""
    if not isinstance(node, dict):
        return resolve(None)
    value = node.get("name")
    return resolve(value if value is not None else node.get("n"))


# -- processes ---------------------------------------------------------------


@dataclass(frozen=True)
class ProcessSummary(CatalogRecord):
    """List-view form of a process.

    Identity is ``(actor, diagram_type, id)``; actor and diagram type are
    folder names, never read from the XML.
    """
    id: str
    process_id: str = ""
    name: MultilingualText = field(default_factory=dict)
    description: MultilingualText = field(default_factory=dict)
    actor: str = ""
    diagram_type: str = ""
    actors: List[MultilingualText] = field(default_factory=list)
    interface_functions: List[str] = field(default_factory=list)
    function_count: int = 0
    exception_count: int = 0
    base_name: str = ""
    file_path: str = ""


@dataclass(frozen=True)
class ProcessDetail(ProcessSummary):
    """Single-item form of a process, with its diagram sources."""
    used_objects: List[MultilingualText] = field(default_factory=list)
    input_parameters: List[Dict[str, Any]] = field(default_factory=list)
    output_parameters: List[Dict[str, Any]] = field(default_factory=list)
    used_data_objects: List[Any] = field(default_factory=list)
    exceptions: List[str] = field(default_factory=list)
    references: List[Any] = field(default_factory=list)
    notes: MultilingualText = field(default_factory=dict)
    mermaid_content: Dict[str, str] = field(default_factory=dict)


def _process_fields(
    proc: Dict[str, Any],
    file_path: PathLike,
    actor: str,
    diagram_type: str,
) -> Dict[str, Any]:
    base_name = Path(file_path).stem
    interface_functions = _names(proc, "interfaceFunctions", "function")
    return {
        "id": base_name,
        "process_id": first_text(proc, "processId") or base_name,
        "name": resolve(proc.get("processName")),
        "description": resolve(proc.get("description")),
        "actor": actor,
        "diagram_type": diagram_type,
        "actors": [resolve(a) for a in children(proc, "actors", "actor")],
        "interface_functions": interface_functions,
        "function_count": len(interface_functions),
        "exception_count": len(children(proc, "possibleExceptions", "exception")),
        "base_name": base_name,
        "file_path": str(file_path),
    }


def parse_process(file_path: PathLike, actor: str, diagram_type: str) -> Optional[ProcessSummary]:
    """Summary of a process document, ``None`` if it is not one."""
    proc = root_node(parse_xml_file(file_path), PROCESS_ROOT)
    if proc is None:
        return None
    return ProcessSummary(**_process_fields(proc, file_path, actor, diagram_type))


def parse_process_detail(
    file_path: PathLike,
    actor: str,
    diagram_type: str,
) -> Optional[ProcessDetail]:
    """Full process record, including per-language diagram sources."""
    proc = root_node(parse_xml_file(file_path), PROCESS_ROOT)
    if proc is None:
        return None
    return ProcessDetail(
        used_objects=[resolve(o) for o in children(proc, "usedObjects", "object")],
        input_parameters=_parameters(proc, "inputParameters"),
        output_parameters=_parameters(proc, "outputParameters"),
        used_data_objects=children(proc, "usedDataObjects", "dataObject"),
        exceptions=_names(proc, "possibleExceptions", "exception"),
        references=children(proc, "references", "reference"),
        notes=resolve(proc.get("notes")),
        mermaid_content=read_diagram_sources(file_path),
        **_process_fields(proc, file_path, actor, diagram_type),
    )


# -- process chains ----------------------------------------------------------


@dataclass(frozen=True)
class ProcessChainSummary(CatalogRecord):
    """List-view form of a process chain."""
    id: str
    chain_id: str = ""
    name: MultilingualText = field(default_factory=dict)
    description: MultilingualText = field(default_factory=dict)
    process_count: int = 0
    step_count: int = 0
    involved_processes: List[Dict[str, Any]] = field(default_factory=list)
    folder: str = ""
    base_name: str = ""
    file_path: str = ""


@dataclass(frozen=True)
class ProcessChainDetail(ProcessChainSummary):
    """Single-item form of a process chain."""
    prerequisites: List[MultilingualText] = field(default_factory=list)
    actors: List[MultilingualText] = field(default_factory=list)
    steps: List[Dict[str, Any]] = field(default_factory=list)
    variants: List[Dict[str, MultilingualText]] = field(default_factory=list)
    outcome: Optional[Dict[str, Any]] = None
    important_notes: List[MultilingualText] = field(default_factory=list)
    use_cases: List[Any] = field(default_factory=list)
    usage_scenario: Optional[MultilingualText] = None
    references: List[Any] = field(default_factory=list)
    mermaid_content: Dict[str, str] = field(default_factory=dict)


def _process_reference(node: Any) -> Dict[str, Any]:
    return {"id": first_text(node, "id"), "name": _name(node)}


def _step_function(node: Any) -> Optional[Dict[str, Any]]:
    if node is None:
        return None
    linked = child(node, "linkedProcess")
    return {
        "name": first_text(node, "name", "n") or text_of(node),
        "linkedProcess": _process_reference(linked) if linked is not None else None,
    }


def _chain_step(node: Any) -> Dict[str, Any]:
    return {
        "stepNumber": first_text(node, "stepNumber"),
        "name": _name(node),
        "description": resolve(child(node, "description")),
        "function": _step_function(child(node, "function")),
        "critical": is_true(child(node, "critical")),
        "optional": is_true(child(node, "optional")),
        "frequency": first_text(node, "frequency") or None,
    }


def _outcome_log_record(node: Dict[str, Any]) -> Dict[str, Any]:
    """Outcome listing log types and stored data items."""
    return {
        "minimumLogMessages": first_text(node, "minimumLogMessages") or None,
        "logTypes": [resolve(t) for t in children(node, "logTypes", "logType")],
        "storedData": [resolve(d) for d in children(node, "storedData", "dataItem")],
    }


def _outcome_state(node: Dict[str, Any]) -> Dict[str, Any]:
    """Outcome describing the resulting state and its log messages."""
    return {
        "state": resolve_optional(node.get("state")),
        "logMessages": [resolve(m) for m in children(node, "logMessages", "logMessage")],
    }


def _outcome_process_data(node: Dict[str, Any]) -> Dict[str, Any]:
    """Outcome describing a structured process data record."""
    data = node.get("processData")
    if data is None:
        return {"processData": None}
    return {
        "processData": {
            "format": resolve_optional(child(data, "format")),
            "separator": first_text(data, "separator") or None,
            "fields": [
                {"name": first_text(f, "name"), "description": resolve(child(f, "description"))}
                for f in as_list(child(data, "field"))
            ],
        }
    }


def parse_outcome(node: Any) -> Optional[Dict[str, Any]]:
    """Chain outcome; all three historical shapes are kept side by side."""
    if node is None:
        return None
    if not isinstance(node, dict):
        node = {"state": node}
    outcome: Dict[str, Any] = {}
    outcome.update(_outcome_log_record(node))
    outcome.update(_outcome_state(node))
    outcome.update(_outcome_process_data(node))
    outcome["artifacts"] = [resolve(a) for a in children(node, "artifacts", "artifact")]
    return outcome


def _important_notes(chain: Dict[str, Any]) -> List[MultilingualText]:
    notes = []
    for section in as_list(chain.get("importantNotes")):
        notes.extend(resolve(n) for n in as_list(child(section, "note")))
    return notes


def _use_case(node: Any) -> Any:
    if isinstance(node, dict) and ("name" in node or "description" in node):
        return {
            "name": resolve(node.get("name")),
            "description": resolve(node.get("description")),
        }
    return resolve(node)


def _chain_fields(chain: Dict[str, Any], file_path: PathLike, folder: str) -> Dict[str, Any]:
    base_name = Path(file_path).stem
    involved = [_process_reference(p) for p in children(chain, "involvedProcesses", "process")]
    return {
        "id": base_name,
        "chain_id": first_text(chain, "chainId") or base_name,
        "name": _name(chain),
        "description": resolve(chain.get("description")),
        "process_count": len(involved),
        "step_count": len(children(chain, "steps", "step")),
        "involved_processes": involved,
        "folder": folder,
        "base_name": base_name,
        "file_path": str(file_path),
    }


def parse_process_chain(file_path: PathLike, folder: str = "") -> Optional[ProcessChainSummary]:
    """Summary of a chain document, ``None`` unless the root is ``processChain``."""
    chain = root_node(parse_xml_file(file_path), PROCESS_CHAIN_ROOT)
    if chain is None:
        return None
    return ProcessChainSummary(**_chain_fields(chain, file_path, folder))


def parse_process_chain_detail(
    file_path: PathLike,
    folder: str = "",
) -> Optional[ProcessChainDetail]:
    """Full chain record with steps, outcome and diagram sources."""
    chain = root_node(parse_xml_file(file_path), PROCESS_CHAIN_ROOT)
    if chain is None:
        return None
    usage_scenario = chain.get("usageScenario")
    return ProcessChainDetail(
        prerequisites=[resolve(p) for p in children(chain, "prerequisites", "prerequisite")],
        actors=[resolve(a) for a in children(chain, "actors", "actor")],
        steps=[_chain_step(s) for s in children(chain, "steps", "step")],
        variants=[
            {"name": _name(v), "description": resolve(child(v, "description"))}
            for v in children(chain, "variants", "variant")
        ],
        outcome=parse_outcome(chain.get("outcome")),
        important_notes=_important_notes(chain),
        use_cases=[_use_case(u) for u in children(chain, "useCases", "useCase")],
        usage_scenario=resolve(usage_scenario) if usage_scenario else None,
        references=children(chain, "references", "reference"),
        mermaid_content=read_diagram_sources(file_path),
        **_chain_fields(chain, file_path, folder),
    )
