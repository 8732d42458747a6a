"""Mapping of access-layer results onto HTTP responses."""

from fastapi import HTTPException

from shared.models.result import ErrorKind, OperationResult

_STATUS_BY_ERROR_KIND = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.STORE: 502,
    ErrorKind.UNEXPECTED: 500,
}


def raise_for_failure(result: OperationResult) -> None:
    """Raise an HTTPException carrying the result's message if the operation failed."""
    if result.ok:
        return
    status_code = _STATUS_BY_ERROR_KIND.get(result.error_kind, 500)
    raise HTTPException(status_code=status_code, detail=result.error)
