# src/auth/services.py
import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from jose import JWTError, jwt
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Optional
from auth.models import User, UserRole, SubscriptionTier
from config import settings
from database import utcnow

logger = logging.getLogger(__name__)


class AuthService:
    pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password."""
        return AuthService.pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return AuthService.pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT access token.

        Role and tier travel in the claims so a request can still be attributed
        to a user while the database is unreachable.
        """
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
        to_encode = {
            "sub": user.id,
            "email": user.email,
            "role": user.role.value,
            "tier": user.subscription_tier.value,
            "exp": expire,
        }
        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def decode_access_token(token: str) -> Optional[dict]:
        try:
            payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM], options={"verify_exp": True})
        except JWTError:
            return None
        if payload.get("sub") is None:
            return None
        return payload

    @staticmethod
    def user_from_claims(payload: dict) -> User:
        """Detached, unsaved user built from token claims (storage-less mode)."""
        return User(
            id=payload["sub"],
            email=payload.get("email", ""),
            role=UserRole(payload.get("role", UserRole.user.value)),
            subscription_tier=SubscriptionTier(payload.get("tier", SubscriptionTier.free.value)),
        )

    @staticmethod
    def get_user(user_id: str, db: Session) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_email(email: str, db: Session) -> Optional[User]:
        """Retrieve a user by email."""
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def login(email: str, password: str, name: Optional[str], db: Session) -> User:
        """Authenticate, creating the account on first login."""
        user = AuthService.get_user_by_email(email, db)
        if user is None:
            user = User(
                email=email,
                name=name,
                password_hash=AuthService.hash_password(password),
                role=UserRole.admin if settings.OWNER_EMAIL and email == settings.OWNER_EMAIL else UserRole.user,
                subscription_tier=SubscriptionTier.free,
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"Provisioned user {user.id} on first login")
            return user

        if not AuthService.verify_password(password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password",
                headers={"WWW-Authenticate": "Bearer"},
            )
        user.last_signed_in = utcnow()
        if name:
            user.name = name
        db.commit()
        db.refresh(user)
        return user
