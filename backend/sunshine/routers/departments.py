from fastapi import APIRouter, Depends, HTTPException

from sunshine.dependencies import get_search_service
from sunshine.errors import NotFound
from sunshine.schemas.department import Department, DepartmentListResponse
from sunshine.services.search_service import SearchService

router = APIRouter(
    prefix="/departments",
    tags=["departments"],
)


@router.get("", response_model=DepartmentListResponse)
def list_departments(service: SearchService = Depends(get_search_service)):
    departments = service.list_departments()
    return DepartmentListResponse(departments=departments, total=len(departments))


@router.get("/{slug}", response_model=Department)
def get_department(slug: str, service: SearchService = Depends(get_search_service)):
    try:
        return service.get_department(slug)
    except NotFound as exc:
        raise HTTPException(status_code=404, detail="Department not found") from exc
