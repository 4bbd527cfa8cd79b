"""Services module initialization."""
from interfacedesign.services.collection import load_category, load_detail
from interfacedesign.services.discovery import (
    find_process_chain,
    load_process_chains,
    load_process_detail,
    load_processes,
)
from interfacedesign.services.multilang import resolve
from interfacedesign.services.overview import get_overview
from interfacedesign.services.process_map import parse_process_map

__all__ = [
    "load_category",
    "load_detail",
    "find_process_chain",
    "load_process_chains",
    "load_process_detail",
    "load_processes",
    "resolve",
    "get_overview",
    "parse_process_map",
]
