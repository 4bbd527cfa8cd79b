"""Schemas module initialization."""
from interfacedesign.schemas.catalog import (
    CamelModel,
    ListResponse,
    GroupedListResponse,
    ExceptionListResponse,
    ProcessListResponse,
    OverviewResponse,
    FunctionResponse,
    EnumResponse,
    TypeResponse,
    ExceptionResponse,
    ProcessResponse,
    ProcessChainResponse,
    ProcessMapResponse,
)

__all__ = [
    "CamelModel",
    "ListResponse",
    "GroupedListResponse",
    "ExceptionListResponse",
    "ProcessListResponse",
    "OverviewResponse",
    "FunctionResponse",
    "EnumResponse",
    "TypeResponse",
    "ExceptionResponse",
    "ProcessResponse",
    "ProcessChainResponse",
    "ProcessMapResponse",
]
