import logging

from fastapi import APIRouter, Depends

from taskflow.deps import get_credential_store, get_current_claims, get_token_service
from taskflow.schemas.user import (
    LoginRequest,
    LoginResponse,
    PasswordChange,
    ProfileResponse,
    ProfileUpdate,
    RegisterResponse,
    UserCreate,
    UserDetail,
)
from taskflow.services.credentials import CredentialStore
from taskflow.services.tokens import Claims, TokenService

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(user: UserCreate, store: CredentialStore = Depends(get_credential_store)):
    user_id = store.register(user.name, user.email, user.password, user.role)
    return {"message": "User registered successfully", "userId": user_id}


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    store: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
):
    db_user = store.verify(credentials.email, credentials.password)
    token = tokens.issue(db_user)
    logger.info("User logged in: %s", db_user.email)
    return {"message": "Login successful", "token": token, "user": db_user}


@router.get("/me", response_model=UserDetail)
def me(claims: Claims = Depends(get_current_claims), store: CredentialStore = Depends(get_credential_store)):
    return store.require(claims.id)


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    profile: ProfileUpdate,
    claims: Claims = Depends(get_current_claims),
    store: CredentialStore = Depends(get_credential_store),
):
    user = store.update_profile(claims.id, profile.name, profile.email)
    return {"message": "Profile updated successfully", "user": user}


@router.put("/password")
def change_password(
    body: PasswordChange,
    claims: Claims = Depends(get_current_claims),
    store: CredentialStore = Depends(get_credential_store),
):
    store.change_secret(claims.id, body.current_password, body.new_password)
    return {"message": "Password changed successfully"}
