"""
Auth API endpoints - proxies the session lifecycle to the auth provider.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Header
from pydantic import BaseModel, Field

from tapago.core.auth import AuthClient, UserContext, extract_bearer_token, get_auth_client, get_current_user
from tapago.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


# ========================================
# Request/Response Schemas
# ========================================

class CredentialsRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=6)


class ResetPasswordRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    redirectTo: Optional[str] = None


class UpdatePasswordRequest(BaseModel):
    password: str = Field(..., min_length=6)


class UserResponse(BaseModel):
    id: str
    email: Optional[str] = None


# ========================================
# API Endpoints
# ========================================

@router.post("/signup")
async def sign_up(
    request: CredentialsRequest,
    auth_client: AuthClient = Depends(get_auth_client),
) -> Dict[str, Any]:
    """
    Create an account. The provider may require e-mail confirmation before sign-in.
    """
    data = await auth_client.sign_up(request.email, request.password)
    logger.info("User signed up", user_id=data.get("id") or data.get("user", {}).get("id"))
    return data


@router.post("/signin")
async def sign_in(
    request: CredentialsRequest,
    auth_client: AuthClient = Depends(get_auth_client),
) -> Dict[str, Any]:
    """
    Exchange e-mail and password for a session (access and refresh tokens).
    """
    return await auth_client.sign_in(request.email, request.password)


@router.post("/signout")
async def sign_out(
    authorization: Optional[str] = Header(None),
    auth_client: AuthClient = Depends(get_auth_client),
):
    """
    End the current session.
    """
    await auth_client.sign_out(extract_bearer_token(authorization))
    return {"message": "Sessão encerrada"}


@router.post("/reset-password")
async def reset_password(
    request: ResetPasswordRequest,
    auth_client: AuthClient = Depends(get_auth_client),
):
    """
    Send a password recovery e-mail.
    """
    await auth_client.request_password_reset(request.email, request.redirectTo)
    return {"message": "E-mail de recuperação enviado"}


@router.post("/update-password")
async def update_password(
    request: UpdatePasswordRequest,
    user: UserContext = Depends(get_current_user),
    auth_client: AuthClient = Depends(get_auth_client),
):
    """
    Change the password of the signed-in user.
    """
    await auth_client.update_password(user.access_token, request.password)
    logger.info("Password updated", user_id=user.user_id)
    return {"message": "Senha atualizada"}


@router.get("/me", response_model=UserResponse)
async def me(user: UserContext = Depends(get_current_user)):
    """
    The authenticated user.
    """
    return UserResponse(id=user.user_id, email=user.email)
