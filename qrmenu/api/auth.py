"""Authentication API endpoints"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from qrmenu.config import settings
from qrmenu.database import get_db
from qrmenu.exceptions import UnauthenticatedError
from qrmenu.models.user import User
from qrmenu.schemas.auth import Token, RefreshRequest, RegisterRequest, UserResponse
from qrmenu.schemas.invitation import InvitationResponse
from qrmenu.services import invitations as invitation_service

router = APIRouter()
logger = structlog.get_logger()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# OAuth2 scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash password"""
    return pwd_context.hash(password)


def create_access_token(user: User) -> str:
    """Create JWT access token"""
    expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": str(user.id),
        "role_id": user.role_id,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_refresh_token(user: User) -> str:
    """Create JWT refresh token"""
    expire = datetime.utcnow() + timedelta(days=settings.refresh_token_expire_days)
    payload = {
        "sub": str(user.id),
        "exp": expire,
        "type": "refresh",
        "jti": uuid4().hex,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def _issue_tokens(user: User) -> Token:
    access_token = create_access_token(user)
    refresh_token = create_refresh_token(user)

    # Store refresh token; issuing a new pair rotates the old one out
    user.refresh_token = refresh_token

    return Token(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=settings.access_token_expire_minutes * 60,
    )


def _decode(token: str, expected_type: str) -> Optional[UUID]:
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

    user_id = payload.get("sub")
    if user_id is None or payload.get("type") != expected_type:
        return None

    try:
        return UUID(user_id)
    except ValueError:
        return None


async def _user_from_token(db: AsyncSession, token: Optional[str]) -> Optional[User]:
    if not token:
        return None

    user_id = _decode(token, "access")
    if user_id is None:
        return None

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None or not user.is_active:
        return None

    return user


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get current authenticated user from token"""
    user = await _user_from_token(db, token)

    if user is None:
        raise UnauthenticatedError("Could not validate credentials")

    return user


async def get_optional_user(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """Current user when a valid bearer token is present, otherwise None"""
    return await _user_from_token(db, token)


@router.post("/login", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
):
    """Authenticate user and return tokens"""
    result = await db.execute(select(User).where(User.email == form_data.username.lower()))
    user = result.scalar_one_or_none()

    if not user or not verify_password(form_data.password, user.hashed_password):
        raise UnauthenticatedError("Incorrect email or password")

    if not user.is_active:
        raise UnauthenticatedError("User account is disabled")

    # Update last login
    user.last_login = datetime.utcnow()

    token = _issue_tokens(user)
    await db.commit()

    logger.info("User logged in", user_id=str(user.id), role_id=user.role_id)
    return token


@router.post("/refresh", response_model=Token)
async def refresh_token(
    request: RefreshRequest,
    db: AsyncSession = Depends(get_db),
):
    """Refresh access token using refresh token"""
    user_id = _decode(request.refresh_token, "refresh")
    if user_id is None:
        raise UnauthenticatedError("Invalid refresh token")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user or not user.is_active or user.refresh_token != request.refresh_token:
        raise UnauthenticatedError("Invalid refresh token")

    token = _issue_tokens(user)
    await db.commit()
    return token


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user),
):
    """Get current user information"""
    return current_user


@router.post("/logout")
async def logout(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Logout user by invalidating refresh token"""
    current_user.refresh_token = None
    await db.commit()
    return {"message": "Successfully logged out"}


@router.get("/invitations/{token}", response_model=InvitationResponse)
async def validate_invitation(
    token: str,
    db: AsyncSession = Depends(get_db),
):
    """Check an invitation token before showing the registration form"""
    return await invitation_service.get_valid_invitation(db, token)


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """Accept an invitation, create the account and sign it in"""
    user, _ = await invitation_service.accept_invitation(
        db,
        token=request.token,
        hashed_password=get_password_hash(request.password),
        full_name=request.full_name,
        restaurant_name=request.restaurant_name,
    )

    user.last_login = datetime.utcnow()
    token = _issue_tokens(user)
    await db.commit()
    return token
