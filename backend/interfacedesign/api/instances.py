"""Instance and template listing routes."""
from fastapi import APIRouter

from interfacedesign.schemas import ListResponse
from interfacedesign.services.instances import list_instances, list_templates

router = APIRouter()


@router.get("/instances", response_model=ListResponse)
def get_instances():
    """All instances with their catalog statistics."""
    instances = list_instances()
    return ListResponse(count=len(instances), items=[i.to_dict() for i in instances])


@router.get("/templates", response_model=ListResponse)
def get_templates():
    templates = list_templates()
    return ListResponse(count=len(templates), items=[t.to_dict() for t in templates])
