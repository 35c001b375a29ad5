import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from core import config
from core.errors import AuthError, ConfigError

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    # 1. 비밀번호를 바이트로 변환
    password_bytes = password.encode('utf-8')
    # 2. 솔트(Salt) 생성 및 해싱
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    # 3. 환경 변수에 넣을 수 있도록 문자열로 반환
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        # 해시 형식이 잘못된 경우
        logger.error("ADMIN_HASHED_PASSWORD is not a valid bcrypt hash")
        return False


def _secret_key() -> str:
    if not config.SECRET_KEY:
        raise ConfigError("JWT_SECRET is not defined")
    return config.SECRET_KEY


def create_access_token(data: dict, expires_minutes: Optional[int] = None) -> str:
    to_encode = data.copy()
    minutes = expires_minutes if expires_minutes is not None else config.ACCESS_TOKEN_EXPIRE_MINUTES
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, _secret_key(), algorithm=config.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """서명과 만료를 검증한다. 유효하지 않으면 None."""
    try:
        return jwt.decode(token, _secret_key(), algorithms=[config.ALGORITHM])
    except JWTError as e:
        logger.info("Rejected admin token: %s", e)
        return None


def authenticate_admin(username: str, password: str) -> str:
    """관리자 계정 확인 후 토큰 발급. 어느 필드가 틀렸는지는 알려주지 않는다."""
    if not config.ADMIN_USERNAME or not (config.ADMIN_HASHED_PASSWORD or config.ADMIN_PASSWORD):
        raise ConfigError("Admin credentials not set in environment variables")

    if config.ADMIN_HASHED_PASSWORD:
        password_ok = verify_password(password, config.ADMIN_HASHED_PASSWORD)
    else:
        password_ok = hmac.compare_digest(password.encode('utf-8'), config.ADMIN_PASSWORD.encode('utf-8'))

    username_ok = hmac.compare_digest(username.encode('utf-8'), config.ADMIN_USERNAME.encode('utf-8'))
    if not (password_ok and username_ok):
        raise AuthError("Invalid credentials")

    return create_access_token(data={"sub": config.ADMIN_USERNAME, "role": "admin"})
