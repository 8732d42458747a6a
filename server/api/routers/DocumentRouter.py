"""Document router — list, register and patch DAK documents."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from server.api.responses import raise_for_failure
from server.dependencies.auth import get_document_service
from shared.helper.dashboard_helper import filter_by_type
from shared.models.document import DocumentCreate, DocumentType, DocumentUpdate
from shared.services.DocumentService import DocumentService

document_router = APIRouter(prefix="/documents", tags=["Documents"])


@document_router.get("")
async def handle_list_documents(
    type: DocumentType | None = None,
    service: DocumentService = Depends(get_document_service),
) -> JSONResponse:
    """List the most recent documents, newest first.

    Args:
        type (DocumentType | None): Restrict to inward or outward documents.
    """
    result = await service.fetch()
    raise_for_failure(result)
    documents = filter_by_type(result.data, type) if type else result.data
    return JSONResponse(content=[doc.model_dump(mode="json") for doc in documents])


@document_router.post("")
async def handle_create_document(
    body: DocumentCreate,
    service: DocumentService = Depends(get_document_service),
) -> JSONResponse:
    """Register a new document. The store assigns its id and DAK number."""
    result = await service.create(body)
    raise_for_failure(result)
    return JSONResponse(status_code=201, content=result.data.model_dump(mode="json"))


@document_router.patch("/{document_id}")
async def handle_update_document(
    document_id: str,
    body: DocumentUpdate,
    service: DocumentService = Depends(get_document_service),
) -> JSONResponse:
    """Apply a partial patch; fields missing from the body stay unchanged."""
    result = await service.update(document_id, body)
    raise_for_failure(result)
    return JSONResponse(content=result.data.model_dump(mode="json"))
