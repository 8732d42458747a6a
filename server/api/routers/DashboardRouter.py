"""Dashboard router — counters, recent activity and department rollup."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from server.api.responses import raise_for_failure
from server.dependencies.auth import get_document_service
from shared.helper.dashboard_helper import build_dashboard
from shared.services.DocumentService import DocumentService

dashboard_router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@dashboard_router.get("")
async def handle_dashboard(request: Request, service: DocumentService = Depends(get_document_service)) -> JSONResponse:
    """Aggregate the fetched document list for the dashboard.

    "Closed today" is evaluated in the configured TIMEZONE.
    """
    result = await service.fetch()
    raise_for_failure(result)
    summary = build_dashboard(result.data, tz=request.app.state.config.get_timezone())
    return JSONResponse(content=summary.model_dump(mode="json"))
