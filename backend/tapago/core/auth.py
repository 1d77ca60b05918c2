"""
Authentication against the hosted auth provider.

The provider (Supabase GoTrue compatible) owns users and sessions. This
module only validates bearer tokens and proxies the session lifecycle
calls, producing a UserContext that is passed explicitly to every store.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx
from fastapi import Depends, Header, HTTPException

from tapago.core.config import settings
from tapago.core.exceptions import AuthProviderError
from tapago.core.logging import bind_user_context, get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class UserContext:
    """Identity of the authenticated user for the current request."""
    user_id: str
    email: Optional[str] = None
    access_token: Optional[str] = None


def _json_body(response: httpx.Response) -> Dict[str, Any]:
    """Decoded JSON object, or {} for empty, non-JSON (e.g. gateway HTML) or non-object bodies."""
    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class AuthClient:
    """Thin async client for the auth provider's REST API."""
    
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.auth_base_url
        self.api_key = api_key if api_key is not None else settings.SUPABASE_ANON_KEY
        self.timeout = timeout or settings.AUTH_TIMEOUT_SECONDS
        self._transport = transport
    
    def _headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Content-Type": "application/json",
        }
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers
    
    async def _request(
        self,
        method: str,
        path: str,
        access_token: Optional[str] = None,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        if not self.base_url:
            raise AuthProviderError("Auth provider not configured (missing SUPABASE_URL)", status_code=500)
        
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    path,
                    headers=self._headers(access_token),
                    json=json,
                    params=params,
                )
        except httpx.TimeoutException:
            logger.error("Auth provider request timed out", path=path)
            raise AuthProviderError("Auth provider timed out", status_code=502)
        except httpx.HTTPError as e:
            logger.error("Auth provider unreachable", path=path, error=str(e))
            raise AuthProviderError("Auth provider unreachable", status_code=502)
        
        if response.status_code >= 400:
            data = _json_body(response)
            message = (
                data.get("error_description")
                or data.get("msg")
                or data.get("message")
                or f"Auth provider error {response.status_code}"
            )
            logger.warning("Auth provider rejected request", path=path, status_code=response.status_code)
            status = 401 if response.status_code in (400, 401, 403, 422) else 502
            raise AuthProviderError(message, status_code=status)
        
        return _json_body(response)
    
    async def get_user(self, access_token: str) -> UserContext:
        """Resolve an access token to the user it belongs to."""
        data = await self._request("GET", "/user", access_token=access_token)
        user_id = data.get("id")
        if not user_id:
            raise AuthProviderError("Token missing user ID")
        return UserContext(user_id=user_id, email=data.get("email"), access_token=access_token)
    
    async def sign_up(self, email: str, password: str) -> Dict[str, Any]:
        return await self._request("POST", "/signup", json={"email": email, "password": password})
    
    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        return await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
    
    async def sign_out(self, access_token: str) -> None:
        await self._request("POST", "/logout", access_token=access_token)
    
    async def request_password_reset(self, email: str, redirect_to: Optional[str] = None) -> None:
        params = {"redirect_to": redirect_to} if redirect_to else None
        await self._request("POST", "/recover", json={"email": email}, params=params)
    
    async def update_password(self, access_token: str, password: str) -> Dict[str, Any]:
        return await self._request("PUT", "/user", access_token=access_token, json={"password": password})


def get_auth_client() -> AuthClient:
    """FastAPI dependency for the auth client."""
    return AuthClient()


def extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing authentication. Provide Authorization header.")
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header format")
    return authorization.split(" ", 1)[1]


async def get_current_user(
    authorization: Optional[str] = Header(None),
    auth_client: AuthClient = Depends(get_auth_client),
) -> UserContext:
    """
    Authenticate the request via the provider's access token.
    
    Usage:
        @router.get("/protected")
        async def protected_route(user: UserContext = Depends(get_current_user)):
            return {"user_id": user.user_id}
    """
    token = extract_bearer_token(authorization)
    
    try:
        user = await auth_client.get_user(token)
    except AuthProviderError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    
    bind_user_context(user.user_id)
    return user
