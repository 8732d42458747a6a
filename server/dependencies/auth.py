from fastapi import Depends, Header, HTTPException, Request

from shared.models.auth import AuthSession
from shared.services.DepartmentService import DepartmentService
from shared.services.DocumentService import DocumentService


def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    """Extract the token from an "Authorization: Bearer <token>" header.

    Raises:
        HTTPException: 401 if the header is missing or malformed.
    """
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing bearer token")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="Missing bearer token")
    return token.strip()


async def get_session(request: Request, token: str = Depends(get_bearer_token)) -> AuthSession:
    """Resolve the bearer token to the signed-in session.

    Raises:
        HTTPException: 401 if the auth provider does not recognise the token.
    """
    user = await request.app.state.auth_client.do_get_user(token)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid or expired session")
    return AuthSession(access_token=token, user=user)


def get_document_service(request: Request, session: AuthSession = Depends(get_session)) -> DocumentService:
    """A document access layer bound to the caller's session, one per request."""
    return DocumentService(
        helper_config=request.app.state.config,
        store_client=request.app.state.store_client,
        session=session,
    )


def get_department_service(request: Request, session: AuthSession = Depends(get_session)) -> DepartmentService:
    return DepartmentService(
        helper_config=request.app.state.config,
        store_client=request.app.state.store_client,
        session=session,
    )
