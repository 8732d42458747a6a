"""Auth router — email/password sign-in for the console."""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from server.dependencies.auth import get_bearer_token
from shared.models.auth import LoginRequest

auth_router = APIRouter(prefix="/auth", tags=["Auth"])


@auth_router.post("/login")
async def handle_login(request: Request, body: LoginRequest) -> JSONResponse:
    """Sign in with email and password.

    Returns:
        JSONResponse: The session (access token, refresh token, user).

    Raises:
        HTTPException: 401 carrying the provider's message verbatim.
    """
    result = await request.app.state.auth_client.do_sign_in(body.email, body.password)
    if not result.ok:
        raise HTTPException(status_code=401, detail=result.error)
    return JSONResponse(content=result.session.model_dump(mode="json"))


@auth_router.post("/logout")
async def handle_logout(request: Request, token: str = Depends(get_bearer_token)) -> JSONResponse:
    await request.app.state.auth_client.do_sign_out(token)
    return JSONResponse(content={"status": "signed_out"})
