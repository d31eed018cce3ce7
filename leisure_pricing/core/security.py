# Tokens are issued by the external auth provider; this module only needs to
# verify them (and mint them for local tooling and tests).
from datetime import datetime, timedelta
from typing import Optional

from jose import jwt, JWTError

from leisure_pricing.core.config import settings
from leisure_pricing.schemas.auth import TokenData


# Create Access Token
def create_access_token(data: dict, expires_minutes: Optional[int] = None) -> str:
    to_encode = dict(data)
    expire = datetime.utcnow() + timedelta(
        minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


# Base decode
def _decode_raw(token: str):
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


# Decode Access Token
def decode_access_token(token: str) -> TokenData:
    payload = _decode_raw(token)
    if not payload:
        return TokenData()
    return TokenData(sub=payload.get("sub"), role=payload.get("role"))
