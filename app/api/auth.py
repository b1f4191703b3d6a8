"""
Auth API endpoints.
Registration, login and current-user lookup. Tokens travel as
`Authorization: Bearer <token>`; the server keeps no session state.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import require_identity
from app.core.database import get_db
from app.schemas.user import AuthResponse, LoginRequest, MeResponse, RegisterRequest, UserResponse
from app.services.account_service import AccountService
from app.services.token_service import TokenIdentity, TokenService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account and return a token for it."""
    user = AccountService.register(
        db,
        email=request.email,
        name=request.name,
        password=request.password,
        is_subscriber=request.is_subscriber,
    )
    return AuthResponse(
        message="User registered successfully",
        token=TokenService.issue(user),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Exchange credentials for a fresh token (also refreshes the subscriber flag)."""
    user = AccountService.authenticate(db, request.email, request.password)
    return AuthResponse(
        message="Login successful",
        token=TokenService.issue(user),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=MeResponse)
async def me(
    identity: TokenIdentity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """Return the account behind the presented token."""
    user = AccountService.get_user(db, identity.user_id)
    return MeResponse(user=UserResponse.model_validate(user))
