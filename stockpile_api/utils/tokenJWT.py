# stockpile_api/utils/tokenJWT.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy.orm import Session

from stockpile_api.config import Settings, get_app_settings
from stockpile_api.database import DatabaseError, get_db
from stockpile_api.models.users import Role, User
from stockpile_api.stores.users import UserStore

logger = logging.getLogger(__name__)

# Missing or non-Bearer headers are reported as 401 by get_current_user
bearer_scheme = HTTPBearer(auto_error=False)


# Generate a signed access token whose only claim is the user id
def create_access_token(user_id: int, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or settings.token_expires)
    to_encode = {"id": user_id, "exp": expire}
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# Retrieve the currently authenticated user based on the JWT token
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> User:
    if credentials is None:
        raise _unauthorized("Authentication required")
    try:
        payload = jwt.decode(credentials.credentials, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except JWTError:
        raise _unauthorized("Invalid token")

    user_id = payload.get("id")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise _unauthorized("Invalid token")

    try:
        user = UserStore(db).find_by_id(user_id)
    except DatabaseError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Authentication failed")
    if user is None:
        logger.info("Token presented for unknown user id %s", user_id)
        raise _unauthorized("Invalid token")
    return user


# Dependency factory for Role-Based Access Control
def require_roles(*allowed_roles: Role):
    permitted = frozenset(Role(r) for r in allowed_roles)

    def _checker(current_user: User = Depends(get_current_user)) -> User:
        try:
            role = Role(current_user.role)
        except ValueError:
            role = None
        if role not in permitted:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
        return current_user

    return _checker
