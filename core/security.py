# security.py
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.auth_utils import decode_access_token
from core.config import ADMIN_COOKIE_NAME

logger = logging.getLogger(__name__)

ADMIN_LOGIN_PATH = "/admin/login"

_bearer = HTTPBearer(auto_error=False)


def _login_redirect() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_303_SEE_OTHER,
        detail="Admin login required",
        headers={"Location": ADMIN_LOGIN_PATH},
    )


async def get_current_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> str:
    """
    /admin 하위 라우트 보호. 쿠키(또는 Bearer 헤더)의 토큰 서명과 만료까지 확인한다.
    없거나 유효하지 않으면 로그인 페이지로 보낸다.
    """
    candidates = [request.cookies.get(ADMIN_COOKIE_NAME)]
    if credentials:
        candidates.append(credentials.credentials)
    tokens = [t for t in candidates if t]

    if not tokens:
        raise _login_redirect()

    # 쿠키가 만료/위조여도 유효한 Bearer 헤더가 있으면 통과
    for token in tokens:
        payload = decode_access_token(token)
        if payload is not None and payload.get("role") == "admin":
            return payload.get("sub")

    logger.warning("Invalid admin session for %s", request.url.path)
    raise _login_redirect()
