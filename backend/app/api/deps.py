from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from app.core.security import decode_access_token
from app.db.store import TaskStore

# Tokens are issued by the auth service; this only shows the input box in the docs
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")

async def get_current_user_id(request: Request, token: str = Depends(oauth2_scheme)) -> str:
    """
    Validates the bearer JWT and returns the user id (sub).
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        user_id = decode_access_token(token, request.app.state.settings)
    except JWTError:
        raise credentials_exception

    if not user_id:
        raise credentials_exception
    return user_id

def get_task_store(request: Request) -> TaskStore:
    """The store opened by the app lifespan."""
    return request.app.state.task_store
