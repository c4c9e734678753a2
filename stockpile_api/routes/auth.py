# stockpile_api/routes/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from stockpile_api.config import Settings, get_app_settings
from stockpile_api.database import DatabaseError, get_db
from stockpile_api.models.users import User
from stockpile_api.schemas import user as schemas
from stockpile_api.stores.users import UserStore
from stockpile_api.utils.tokenJWT import create_access_token, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.LoginResponse)
def login(
    payload: schemas.UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    users = UserStore(db)
    try:
        user = users.find_by_email(payload.email)
        if not user or not users.compare_password(payload.password, user.password):
            logger.warning("Failed login attempt for %s", payload.email)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

        token = create_access_token(user.id, settings)
        users.update_last_login(user.id)
    except DatabaseError:
        logger.exception("Login error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Login failed")

    logger.info("User %s logged in", user.id)
    return {"token": token, "user": schemas.UserPublic.model_validate(user)}


# Retrieve current authenticated user details
@router.get("/me", response_model=schemas.UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user


# Tokens stay valid until they expire; nothing is revoked server side
@router.post("/logout", response_model=schemas.MessageResponse)
def logout(current_user: User = Depends(get_current_user)):
    logger.info("User %s logged out", current_user.id)
    return {"message": "Logged out successfully"}
