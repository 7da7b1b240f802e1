# src/auth/routes.py
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional
from auth.services import AuthService
from auth.schemas import UserLogin, UserResponse, Token, SuccessResponse
from auth.models import User, UserRole
from config import settings
from database import get_db, require_db

router = APIRouter(prefix="/auth", tags=["auth"])
bearer_scheme = HTTPBearer(auto_error=False)


def _resolve_user(token: Optional[str], db: Optional[Session]) -> Optional[User]:
    if not token:
        return None
    payload = AuthService.decode_access_token(token)
    if payload is None:
        return None
    if db is None:
        return AuthService.user_from_claims(payload)
    return AuthService.get_user(payload["sub"], db)


def _token_from_request(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.COOKIE_NAME)


def get_optional_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Optional[Session] = Depends(get_db),
) -> Optional[User]:
    """Current user if the request carries a valid token, else None."""
    return _resolve_user(_token_from_request(request, credentials), db)


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Optional[Session] = Depends(get_db),
) -> User:
    """Retrieve the current authenticated user."""
    token = _token_from_request(request, credentials)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user = _resolve_user(token, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def check_admin_role(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the user has admin role."""
    if current_user.role != UserRole.admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return current_user


@router.post("/login", response_model=Token)
def login(user: UserLogin, response: Response, db: Optional[Session] = Depends(get_db)):
    """Login (or sign up on first login) and return a JWT token."""
    db = require_db(db)
    authenticated_user = AuthService.login(user.email, user.password, user.name, db)
    access_token = AuthService.create_access_token(authenticated_user)
    response.set_cookie(
        settings.COOKIE_NAME,
        access_token,
        httponly=True,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=Optional[UserResponse])
def read_users_me(current_user: Optional[User] = Depends(get_optional_user)):
    """Current user, or null when not signed in."""
    if current_user is None:
        return None
    return UserResponse.model_validate(current_user)


@router.post("/logout", response_model=SuccessResponse)
def logout(response: Response):
    """Clear the session cookie."""
    response.delete_cookie(settings.COOKIE_NAME)
    return SuccessResponse()
