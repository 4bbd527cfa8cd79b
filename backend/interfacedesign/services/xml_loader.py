"""Generic XML document loader.

Turns an XML file into nested dicts, lists and strings:

- attributes are merged into the element's own dict,
- a child element that occurs once stays a single value, repeated
  children become a list (callers normalize with :func:`as_list`),
- an element with neither attributes nor children is its trimmed text,
- mixed text of an element with attributes or children is kept under ``"_"``.
"""
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

logger = logging.getLogger(__name__)

TEXT_KEY = "_"
ATTRIBUTES_KEY = "$"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

Node = Union[str, Dict[str, Any], List[Any]]
PathLike = Union[str, Path]

_LEADING_INT = re.compile(r"^\s*([+-]?)(0[xX][0-9a-fA-F]+|\d+)")


@dataclass(frozen=True)
class ParserOptions:
    """Fixed conversion options; one immutable instance is shared."""
    merge_attributes: bool = True
    explicit_array: bool = False
    trim: bool = True


DEFAULT_OPTIONS = ParserOptions()


@dataclass(frozen=True)
class XmlFileEntry:
    """An XML file found in a catalog directory."""
    name: str
    path: Path
    base_name: str


def _local_name(tag: str) -> str:
    if tag.startswith("{"):
        namespace, _, local = tag[1:].partition("}")
        if namespace == XML_NAMESPACE:
            return f"xml:{local}"
        return local
    return tag


def _add_value(node: Dict[str, Any], key: str, value: Any, explicit_array: bool) -> None:
    if key not in node:
        node[key] = [value] if explicit_array else value
    elif isinstance(node[key], list):
        node[key].append(value)
    else:
        node[key] = [node[key], value]


def element_to_node(element, options: ParserOptions = DEFAULT_OPTIONS) -> Node:
    """Convert one ElementTree element into the generic node shape."""
    attributes = {_local_name(k): v for k, v in element.attrib.items()}
    elements = [sub for sub in element if isinstance(sub.tag, str)]

    text_parts = [element.text or ""]
    text_parts.extend(sub.tail or "" for sub in element)
    text = "".join(text_parts)
    if options.trim:
        text = text.strip()

    if not elements and not attributes:
        return text

    node: Dict[str, Any] = {}
    if attributes:
        if options.merge_attributes:
            for key, value in attributes.items():
                _add_value(node, key, value, options.explicit_array)
        else:
            node[ATTRIBUTES_KEY] = attributes
    if text:
        node[TEXT_KEY] = text

    for sub in elements:
        _add_value(
            node,
            _local_name(sub.tag),
            element_to_node(sub, options),
            options.explicit_array,
        )
    return node


def parse_xml_string(
    content: Union[str, bytes],
    options: ParserOptions = DEFAULT_OPTIONS,
) -> Dict[str, Any]:
    """Parse XML content into ``{root_tag: node}``.

    Raises:
        ET.ParseError: Malformed XML.
        DefusedXmlException: Forbidden constructs (entities, DTDs).
    """
    root = ET.fromstring(content)
    return {_local_name(root.tag): element_to_node(root, options)}


def parse_xml_file(
    file_path: PathLike,
    options: ParserOptions = DEFAULT_OPTIONS,
) -> Optional[Dict[str, Any]]:
    """Read and parse an XML file, ``None`` when unreadable or malformed."""
    try:
        content = Path(file_path).read_bytes()
        return parse_xml_string(content, options)
    except (OSError, ET.ParseError, DefusedXmlException) as e:
        logger.warning("Error parsing XML file %s: %s", file_path, e)
        return None


def list_xml_files(dir_path: PathLike) -> List[XmlFileEntry]:
    """List ``*.xml`` files of a directory, sorted by name.

    A missing directory yields an empty list.
    """
    directory = Path(dir_path)
    if not directory.is_dir():
        return []
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.error("Error reading directory %s: %s", directory, e)
        return []
    return [
        XmlFileEntry(name=entry.name, path=entry, base_name=entry.name[: -len(".xml")])
        for entry in entries
        if entry.name.endswith(".xml") and entry.is_file()
    ]


def as_list(value: Any) -> List[Any]:
    """Coerce a maybe-single, maybe-repeated value to a list."""
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return value
    return [value]


def child(node: Any, *path: str) -> Any:
    """Walk nested dict keys, ``None`` as soon as a step is missing."""
    current = node
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def children(node: Any, container: str, item: str) -> List[Any]:
    """Items of a ``<container><item/>...</container>`` wrapper as a list."""
    return as_list(child(node, container, item))


def text_of(value: Any) -> str:
    """Plain text of a node: the string itself or its ``"_"`` content."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        text = value.get(TEXT_KEY, "")
        return text if isinstance(text, str) else ""
    if isinstance(value, list):
        return text_of(value[0]) if value else ""
    return str(value)


def first_text(node: Any, *keys: str) -> str:
    """Text of the first key that carries a non-empty value."""
    if not isinstance(node, dict):
        return ""
    for key in keys:
        text = text_of(node.get(key))
        if text:
            return text
    return ""


def is_true(value: Any) -> bool:
    """XML boolean: only ``"true"`` (or ``True``) is truthy."""
    if value is True:
        return True
    return isinstance(value, str) and value.strip() == "true"


def to_int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    """Leading integer of a text value (decimal or ``0x`` hex), ``default`` if none."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(text_of(value))
    if not match:
        return default
    sign, digits = match.groups()
    number = int(digits, 16) if digits[:2] in ("0x", "0X") else int(digits)
    return -number if sign == "-" else number


def root_node(document: Optional[Dict[str, Any]], name: str) -> Optional[Dict[str, Any]]:
    """The ``name`` root of a parsed document as a dict, ``None`` if absent or empty."""
    if not document:
        return None
    node = document.get(name)
    if node is None or node == "":
        return None
    if isinstance(node, dict):
        return node
    return {TEXT_KEY: text_of(node)}
