from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union

from jose import jwt

from app.core.config import Settings, settings as default_settings

def create_access_token(subject: Union[str, Any], settings: Optional[Settings] = None) -> str:
    """
    Access token carrying the user id in `sub`.
    Login lives in the auth service; this is used for local tokens and tests.
    """
    settings = settings or default_settings
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {"exp": expire, "sub": str(subject), "type": "access"}
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

def decode_access_token(token: str, settings: Optional[Settings] = None) -> Optional[str]:
    """
    Returns the `sub` of a valid token, None when it has no subject.
    Raises jose.JWTError for bad signatures or expired tokens.
    """
    settings = settings or default_settings
    payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    return payload.get("sub")
