"""Collection assembly for the flat catalog categories.

``load_category`` parses every XML file of ``<base>/<category>`` with the
matching summary normalizer and drops files that are not of that kind. The
sorting and grouping helpers build the list views on top of it.
"""
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from interfacedesign.services.enum_parser import parse_enum, parse_enum_detail
from interfacedesign.services.exception_parser import parse_exception, parse_exception_detail
from interfacedesign.services.function_parser import parse_function, parse_function_detail
from interfacedesign.services.multilang import UNCATEGORIZED, text_for_lang
from interfacedesign.services.parallel import parse_many, parse_or_none, run_parse
from interfacedesign.services.records import CatalogRecord
from interfacedesign.services.type_parser import parse_type, parse_type_detail
from interfacedesign.services.xml_loader import PathLike, list_xml_files

logger = logging.getLogger(__name__)

CATEGORIES = ("functions", "enums", "types", "exceptions")

CATEGORY_PARSERS: Dict[str, Callable[[PathLike], Optional[CatalogRecord]]] = {
    "functions": parse_function,
    "enums": parse_enum,
    "types": parse_type,
    "exceptions": parse_exception,
}

DETAIL_PARSERS: Dict[str, Callable[[PathLike], Optional[CatalogRecord]]] = {
    "functions": parse_function_detail,
    "enums": parse_enum_detail,
    "types": parse_type_detail,
    "exceptions": parse_exception_detail,
}


async def load_category(base_path: PathLike, category: str) -> List[CatalogRecord]:
    """Summaries of all documents in ``<base_path>/<category>``.

    A missing directory gives ``[]``, as does an unknown category (logged).
    """
    parser = CATEGORY_PARSERS.get(category)
    if parser is None:
        logger.error("Unknown category: %s", category)
        return []

    files = await run_parse(list_xml_files, Path(base_path) / category)
    return await parse_many(parser, [(f.path,) for f in files])


def load_detail(base_path: PathLike, category: str, item_id: str) -> Optional[CatalogRecord]:
    """Detail record of ``<base_path>/<category>/<item_id>.xml``.

    ``None`` if the file is absent, not of that kind or fails to parse (logged).
    """
    parser = DETAIL_PARSERS.get(category)
    if parser is None:
        logger.error("Unknown category: %s", category)
        return None
    file_path = Path(base_path) / category / f"{item_id}.xml"
    if not file_path.is_file():
        return None
    return parse_or_none(parser, file_path)


def category_label(item: Any) -> str:
    """Grouping key of a record: its category text in the default language."""
    category = getattr(item, "category", None)
    return text_for_lang(category) or UNCATEGORIZED


def sort_by_category(items: Iterable[CatalogRecord]) -> List[CatalogRecord]:
    """Functions, types and exceptions: by category label, then name."""
    return sorted(items, key=lambda i: (category_label(i).casefold(), i.name.casefold()))


def sort_by_name(items: Iterable[CatalogRecord]) -> List[CatalogRecord]:
    return sorted(items, key=lambda i: i.name.casefold())


def group_by(
    items: Iterable[CatalogRecord],
    key: Callable[[CatalogRecord], str],
) -> Dict[str, List[Dict[str, Any]]]:
    """Group serialized records by ``key``; groups appear in first-seen order."""
    groups: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
    for item in items:
        groups[key(item)].append(item.to_dict())
    return dict(groups)


def group_by_category(items: Iterable[CatalogRecord]) -> Dict[str, List[Dict[str, Any]]]:
    return group_by(items, category_label)


def group_by_severity(items: Iterable[CatalogRecord]) -> Dict[str, List[Dict[str, Any]]]:
    return group_by(items, lambda item: item.severity)
