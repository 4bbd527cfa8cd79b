"""Response envelopes for the catalog API (camelCase on the wire)."""
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Record = Dict[str, Any]
Grouping = Dict[str, List[Record]]


class CamelModel(BaseModel):
    """Base model that serializes field names as camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ListResponse(CamelModel):
    """Plain list of records."""
    success: bool = True
    count: int
    items: List[Record]


class GroupedListResponse(ListResponse):
    """Records plus their grouping by category label."""
    grouped: Grouping


class ExceptionListResponse(GroupedListResponse):
    by_severity: Grouping


class ProcessListResponse(ListResponse):
    grouped_by_actor: Grouping
    grouped_by_type: Grouping


class OverviewResponse(CamelModel):
    success: bool = True
    base_path: str
    overview: Dict[str, Any]


class FunctionResponse(CamelModel):
    success: bool = True
    function: Record


class EnumResponse(CamelModel):
    success: bool = True
    enum: Record


class TypeResponse(CamelModel):
    success: bool = True
    type: Record


class ExceptionResponse(CamelModel):
    success: bool = True
    exception: Record


class ProcessResponse(CamelModel):
    success: bool = True
    process: Record


class ProcessChainResponse(CamelModel):
    success: bool = True
    process_chain: Record


class ProcessMapResponse(CamelModel):
    success: bool = True
    process_map: Record
