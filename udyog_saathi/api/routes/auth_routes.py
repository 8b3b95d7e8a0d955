"""
Authentication Routes

POST /signup - Create a Worker or Business account
POST /login - Verify password, return the account and a JWT
PUT /profile-update - Update profile fields
GET /me - Account behind the bearer token
"""

from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError

from udyog_saathi.core.auth import hash_password, verify_password, create_access_token, get_current_account
from udyog_saathi.core.logging import get_logger
from udyog_saathi.services.mongo_service import account_store_for
from udyog_saathi.schemas.schemas import (
    SignupRequest, LoginRequest, LoginResponse, ProfileUpdate, ProfileResponse, AckResponse
)

router = APIRouter(tags=["Authentication"])
logger = get_logger(__name__)


@router.post("/signup", response_model=AckResponse, status_code=201)
async def signup(request: SignupRequest):
    """Register a new account. The role picks the account collection."""
    store = account_store_for(request.role)
    if store.get_credentials(request.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    doc = request.model_dump(by_alias=True, exclude={"role"}, exclude_none=True)
    doc["password"] = hash_password(request.password)

    try:
        store.create(doc)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Email already registered")

    logger.info("New %s account: %s", request.role.value, request.email)
    return AckResponse(msg="Success")


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest):
    """
    Login and receive the account plus a JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    store = account_store_for(request.role)
    doc = store.get_credentials(request.email)

    if not doc or not doc.get("password") or not verify_password(request.password, doc["password"]):
        return JSONResponse(status_code=401, content={"error": "Invalid login"})

    account = store.get_by_email(request.email)
    token = create_access_token(data={"sub": account.email, "role": account.role})
    return LoginResponse(user=account.model_dump(by_alias=True), access_token=token)


@router.put("/profile-update", response_model=ProfileResponse)
async def profile_update(update: ProfileUpdate):
    """Set the supplied profile fields. Email and role only locate the account."""
    fields = update.model_dump(by_alias=True, exclude={"email", "role"}, exclude_none=True)
    account = account_store_for(update.role).update_profile(update.email, fields)
    return ProfileResponse(user=account.model_dump(by_alias=True) if account else None)


@router.get("/me")
async def get_me(account=Depends(get_current_account)):
    """Get current authenticated account."""
    return account.model_dump(by_alias=True)
