"""Route Dependencies — bearer-token guard for protected routers."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from user_management_api.core.errors import AuthenticationError
from user_management_api.core.security import TokenClaims, decode_access_token

bearer_scheme = HTTPBearer(
    auto_error=False,
    description="Enter the token returned by POST /login.",
)


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenClaims:
    """Resolve the caller from the Authorization header or raise 401.

    Usage on a router:
        APIRouter(dependencies=[Depends(get_current_principal)])
    """
    if credentials is None:
        raise AuthenticationError("Missing bearer token")
    return decode_access_token(credentials.credentials)
