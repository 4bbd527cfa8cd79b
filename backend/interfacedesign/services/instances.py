"""Instance and template catalogs on disk.

An instance is ``<INSTANCES_ROOT>/<name>/interfacedesign``. Instances without
their own catalog fall back to the default template.
"""
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from interfacedesign.core.config import settings
from interfacedesign.services.records import CatalogRecord
from interfacedesign.services.xml_loader import list_xml_files

logger = logging.getLogger(__name__)

INSTANCE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass(frozen=True)
class CatalogSource(CatalogRecord):
    """An instance or template directory with its catalog statistics."""
    id: str
    name: str
    path: str
    has_interfaces: bool = False
    function_count: int = 0
    exception_count: int = 0
    type_count: int = 0
    enum_count: int = 0


def is_valid_instance_name(name: str) -> bool:
    return bool(INSTANCE_NAME_PATTERN.match(name))


def _has_entries(path: Path) -> bool:
    try:
        return any(path.iterdir())
    except OSError:
        return False


def resolve_interface_design_path(instance: str) -> Optional[Path]:
    """Catalog directory for ``instance``, else the default template's, else ``None``."""
    if is_valid_instance_name(instance):
        instance_path = Path(settings.INSTANCES_ROOT) / instance / settings.INTERFACE_DESIGN_FOLDER
        if instance_path.is_dir() and _has_entries(instance_path):
            return instance_path
    else:
        logger.warning("Invalid instance name: %r", instance)

    template_path = (
        Path(settings.TEMPLATES_ROOT)
        / settings.DEFAULT_TEMPLATE
        / settings.INTERFACE_DESIGN_FOLDER
    )
    if template_path.is_dir():
        return template_path
    return None


def _catalog_source(directory: Path) -> CatalogSource:
    catalog = directory / settings.INTERFACE_DESIGN_FOLDER
    counts = {
        category: len(list_xml_files(catalog / category))
        for category in ("functions", "exceptions", "types", "enums")
    }
    return CatalogSource(
        id=directory.name,
        name=directory.name,
        path=str(catalog),
        has_interfaces=sum(counts.values()) > 0,
        function_count=counts["functions"],
        exception_count=counts["exceptions"],
        type_count=counts["types"],
        enum_count=counts["enums"],
    )


def _directories(root: str) -> List[Path]:
    root_path = Path(root)
    if not root_path.is_dir():
        logger.warning("Catalog root %s does not exist", root_path)
        return []
    return sorted((p for p in root_path.iterdir() if p.is_dir()), key=lambda p: p.name)


def list_instances() -> List[CatalogSource]:
    """All instance directories with a valid name."""
    return [
        _catalog_source(d)
        for d in _directories(settings.INSTANCES_ROOT)
        if is_valid_instance_name(d.name)
    ]


def list_templates() -> List[CatalogSource]:
    """All template directories, skipping hidden and ``_``-prefixed ones."""
    return [
        _catalog_source(d)
        for d in _directories(settings.TEMPLATES_ROOT)
        if not d.name.startswith((".", "_"))
    ]
