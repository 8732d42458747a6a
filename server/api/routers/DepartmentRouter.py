from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from server.api.responses import raise_for_failure
from server.dependencies.auth import get_department_service
from shared.services.DepartmentService import DepartmentService

department_router = APIRouter(prefix="/departments", tags=["Departments"])


@department_router.get("")
async def handle_list_departments(service: DepartmentService = Depends(get_department_service)) -> JSONResponse:
    """List active departments ordered by name, for the registration forms."""
    result = await service.fetch()
    raise_for_failure(result)
    return JSONResponse(content=[department.model_dump(mode="json") for department in result.data])
