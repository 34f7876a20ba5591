"""
Authentication Routes

POST /auth/register - Register new admin account
POST /auth/login - Login and get JWT token
POST /auth/logout - Revoke the current token
GET /auth/me - Get current user info
"""

from fastapi import APIRouter, Depends

from app.core.auth import get_bearer_token, get_current_admin
from app.db.context import BackendContext, get_context
from app.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, User, MessageResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(request: RegisterRequest, ctx: BackendContext = Depends(get_context)):
    """
    Register a new admin account.

    After registration, login to get access token.
    """
    ctx.auth.sign_up(request.name, request.email, request.password)
    return MessageResponse(message="Registered successfully. Please login.")


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, ctx: BackendContext = Depends(get_context)):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    token, user = ctx.auth.sign_in(request.email, request.password)
    return TokenResponse(access_token=token, user=user)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: str = Depends(get_bearer_token),
    admin: User = Depends(get_current_admin),
    ctx: BackendContext = Depends(get_context),
):
    """Sign out. The token stops working immediately."""
    ctx.auth.sign_out(token)
    return MessageResponse(message="Signed out")


@router.get("/me", response_model=User)
async def get_me(admin: User = Depends(get_current_admin)):
    """Get current authenticated user's info."""
    return admin
