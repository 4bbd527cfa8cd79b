"""Process and process chain discovery under ``<base>/processes``.

Each top-level folder is classified by its shape:

* it has a ``flow`` or ``sequenz`` subfolder -> actor folder; every XML file
  in ``<actor>/<diagramType>/`` is a process,
* otherwise -> chain folder; XML files directly inside it are process chains
  when their root element is ``processChain``, anything else is ignored.
"""
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from interfacedesign.services.parallel import parse_many, parse_or_none, run_parse
from interfacedesign.services.process_parser import (
    ProcessChainDetail,
    ProcessChainSummary,
    ProcessDetail,
    ProcessSummary,
    parse_process,
    parse_process_chain,
    parse_process_chain_detail,
    parse_process_detail,
)
from interfacedesign.services.xml_loader import PathLike, list_xml_files

logger = logging.getLogger(__name__)

PROCESSES_FOLDER = "processes"
DIAGRAM_TYPES = ("flow", "sequenz")


def _subfolders(path: Path) -> List[Path]:
    try:
        return sorted((p for p in path.iterdir() if p.is_dir()), key=lambda p: p.name)
    except OSError as e:
        logger.error("Error reading directory %s: %s", path, e)
        return []


def is_actor_folder(folder: PathLike) -> bool:
    """True when the folder holds a ``flow`` or ``sequenz`` subfolder."""
    return any(sub.name in DIAGRAM_TYPES for sub in _subfolders(Path(folder)))


def _top_level_folders(base_path: PathLike) -> List[Path]:
    processes_path = Path(base_path) / PROCESSES_FOLDER
    if not processes_path.is_dir():
        return []
    return _subfolders(processes_path)


def _process_jobs(base_path: PathLike) -> List[Tuple[Path, str, str]]:
    jobs = []
    for folder in _top_level_folders(base_path):
        if not is_actor_folder(folder):
            continue
        for diagram_folder in _subfolders(folder):
            if diagram_folder.name not in DIAGRAM_TYPES:
                continue
            for entry in list_xml_files(diagram_folder):
                jobs.append((entry.path, folder.name, diagram_folder.name))
    return jobs


def _chain_jobs(base_path: PathLike) -> List[Tuple[Path, str]]:
    jobs = []
    for folder in _top_level_folders(base_path):
        if is_actor_folder(folder):
            continue
        for entry in list_xml_files(folder):
            jobs.append((entry.path, folder.name))
    return jobs


async def load_processes(base_path: PathLike) -> List[ProcessSummary]:
    """Summaries of all processes, actor and diagram type taken from the folders."""
    jobs = await run_parse(_process_jobs, base_path)
    return await parse_many(parse_process, jobs)


async def load_process_chains(base_path: PathLike) -> List[ProcessChainSummary]:
    """Summaries of all process chains, with their folder name attached."""
    jobs = await run_parse(_chain_jobs, base_path)
    return await parse_many(parse_process_chain, jobs)


def load_process_detail(
    base_path: PathLike,
    actor: str,
    diagram_type: str,
    process_id: str,
) -> Optional[ProcessDetail]:
    """Detail of ``processes/<actor>/<diagram_type>/<process_id>.xml``.

    ``None`` if the file is absent or fails to parse (logged).
    """
    if diagram_type not in DIAGRAM_TYPES:
        return None
    file_path = Path(base_path) / PROCESSES_FOLDER / actor / diagram_type / f"{process_id}.xml"
    if not file_path.is_file():
        return None
    return parse_or_none(parse_process_detail, file_path, actor, diagram_type)


async def find_process_chain(base_path: PathLike, chain_id: str) -> Optional[ProcessChainDetail]:
    """Detail of the chain whose file name or ``chainId`` equals ``chain_id``."""
    for chain in await load_process_chains(base_path):
        if chain_id in (chain.id, chain.chain_id):
            return await run_parse(
                parse_or_none, parse_process_chain_detail, chain.file_path, chain.folder
            )
    return None
