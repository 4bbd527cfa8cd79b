"""Interface design catalog API routes."""
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException

from interfacedesign.schemas import (
    EnumResponse,
    ExceptionListResponse,
    ExceptionResponse,
    FunctionResponse,
    GroupedListResponse,
    ListResponse,
    OverviewResponse,
    ProcessChainResponse,
    ProcessListResponse,
    ProcessMapResponse,
    ProcessResponse,
    TypeResponse,
)
from interfacedesign.services.collection import (
    group_by,
    group_by_category,
    group_by_severity,
    load_category,
    load_detail,
    sort_by_category,
    sort_by_name,
)
from interfacedesign.services.discovery import (
    find_process_chain,
    load_process_chains,
    load_process_detail,
    load_processes,
)
from interfacedesign.services.instances import resolve_interface_design_path
from interfacedesign.services.overview import get_overview
from interfacedesign.services.parallel import run_parse
from interfacedesign.services.process_map import parse_process_map

router = APIRouter(prefix="/{instance}/interfacedesign", tags=["interfacedesign"])


def check_segment(value: str) -> str:
    """Reject path parameters that would leave their directory."""
    if value in ("", ".", "..") or "/" in value or "\\" in value:
        raise HTTPException(status_code=400, detail=f"Invalid path segment: {value!r}")
    return value


def get_base_path(instance: str) -> Path:
    """Catalog directory of an instance; 404 when there is none."""
    check_segment(instance)
    base_path = resolve_interface_design_path(instance)
    if base_path is None:
        raise HTTPException(status_code=404, detail="InterfaceDesign folder not found")
    return base_path


async def _detail(base_path: Path, category: str, item_id: str, label: str) -> dict:
    record = await run_parse(load_detail, base_path, category, check_segment(item_id))
    if record is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return record.to_dict()


@router.get("/overview", response_model=OverviewResponse)
async def overview(base_path: Path = Depends(get_base_path)):
    """Item counts per collection and category."""
    return OverviewResponse(base_path=str(base_path), overview=await get_overview(base_path))


@router.get("/functions", response_model=GroupedListResponse)
async def list_functions(base_path: Path = Depends(get_base_path)):
    functions = sort_by_category(await load_category(base_path, "functions"))
    return GroupedListResponse(
        count=len(functions),
        items=[f.to_dict() for f in functions],
        grouped=group_by_category(functions),
    )


@router.get("/enums", response_model=GroupedListResponse)
async def list_enums(base_path: Path = Depends(get_base_path)):
    enums = sort_by_name(await load_category(base_path, "enums"))
    return GroupedListResponse(
        count=len(enums),
        items=[e.to_dict() for e in enums],
        grouped=group_by_category(enums),
    )


@router.get("/types", response_model=GroupedListResponse)
async def list_types(base_path: Path = Depends(get_base_path)):
    types = sort_by_category(await load_category(base_path, "types"))
    return GroupedListResponse(
        count=len(types),
        items=[t.to_dict() for t in types],
        grouped=group_by_category(types),
    )


@router.get("/exceptions", response_model=ExceptionListResponse)
async def list_exceptions(base_path: Path = Depends(get_base_path)):
    """Exceptions grouped by category label and by severity."""
    exceptions = sort_by_category(await load_category(base_path, "exceptions"))
    return ExceptionListResponse(
        count=len(exceptions),
        items=[e.to_dict() for e in exceptions],
        grouped=group_by_category(exceptions),
        by_severity=group_by_severity(exceptions),
    )


@router.get("/function/{item_id}", response_model=FunctionResponse)
async def get_function(item_id: str, base_path: Path = Depends(get_base_path)):
    return FunctionResponse(function=await _detail(base_path, "functions", item_id, "Function"))


@router.get("/enum/{item_id}", response_model=EnumResponse)
async def get_enum(item_id: str, base_path: Path = Depends(get_base_path)):
    return EnumResponse(enum=await _detail(base_path, "enums", item_id, "Enum"))


@router.get("/type/{item_id}", response_model=TypeResponse)
async def get_type(item_id: str, base_path: Path = Depends(get_base_path)):
    return TypeResponse(type=await _detail(base_path, "types", item_id, "Type"))


@router.get("/exception/{item_id}", response_model=ExceptionResponse)
async def get_exception(item_id: str, base_path: Path = Depends(get_base_path)):
    return ExceptionResponse(
        exception=await _detail(base_path, "exceptions", item_id, "Exception")
    )


@router.get("/processes", response_model=ProcessListResponse)
async def list_processes(base_path: Path = Depends(get_base_path)):
    """Processes sorted by actor and id, grouped by actor and diagram type."""
    processes = sorted(await load_processes(base_path), key=lambda p: (p.actor, p.id))
    return ProcessListResponse(
        count=len(processes),
        items=[p.to_dict() for p in processes],
        grouped_by_actor=group_by(processes, lambda p: p.actor),
        grouped_by_type=group_by(processes, lambda p: p.diagram_type or "unknown"),
    )


@router.get("/process/{actor}/{diagram_type}/{item_id}", response_model=ProcessResponse)
async def get_process(
    actor: str,
    diagram_type: str,
    item_id: str,
    base_path: Path = Depends(get_base_path),
):
    record = await run_parse(
        load_process_detail,
        base_path,
        check_segment(actor),
        check_segment(diagram_type),
        check_segment(item_id),
    )
    if record is None:
        raise HTTPException(status_code=404, detail="Process not found")
    return ProcessResponse(process=record.to_dict())


@router.get("/processchains", response_model=ListResponse)
async def list_process_chains(base_path: Path = Depends(get_base_path)):
    chains = sorted(await load_process_chains(base_path), key=lambda c: c.chain_id)
    return ListResponse(count=len(chains), items=[c.to_dict() for c in chains])


@router.get("/processchain/{item_id}", response_model=ProcessChainResponse)
async def get_process_chain(item_id: str, base_path: Path = Depends(get_base_path)):
    """Chain detail, looked up by file name or ``chainId``."""
    record = await find_process_chain(base_path, check_segment(item_id))
    if record is None:
        raise HTTPException(status_code=404, detail="Process chain not found")
    return ProcessChainResponse(process_chain=record.to_dict())


@router.get("/processmap", response_model=ProcessMapResponse)
async def get_process_map(base_path: Path = Depends(get_base_path)):
    process_map = await run_parse(parse_process_map, base_path)
    if process_map is None:
        raise HTTPException(status_code=404, detail="Process map not found")
    return ProcessMapResponse(process_map=process_map.to_dict())
