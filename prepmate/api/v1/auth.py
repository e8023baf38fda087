# prepmate/api/v1/auth.py
import logging

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo.errors import DuplicateKeyError

from prepmate.api.v1.schemas import LoginIn, SignupIn, TokenOut
from prepmate.repositories import users
from prepmate.services.auth import (
    JWTError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

security = HTTPBearer()


@router.post("/signup", status_code=201, response_model=TokenOut)
async def signup(payload: SignupIn):
    if await users.get_user_by_email(payload.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    try:
        uid = await users.create_user(payload.email, hash_password(payload.password), payload.name)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Email already registered")
    logger.info("user %s signed up", uid)
    return {"access_token": create_access_token(uid), "token_type": "bearer"}


@router.post("/login", response_model=TokenOut)
async def login(payload: LoginIn):
    user = await users.get_user_by_email(payload.email)
    if not user or not verify_password(payload.password, user.get("password_hash")):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return {"access_token": create_access_token(user["id"]), "token_type": "bearer"}


# Dependency to get the current user document
async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)):
    try:
        td = decode_access_token(credentials.credentials)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")
    if not td.sub or not ObjectId.is_valid(td.sub):
        raise HTTPException(status_code=401, detail="Invalid token")
    user = await users.get_user(td.sub)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user


@router.get("/me")
async def me(current_user=Depends(get_current_user)):
    return {"user": users.public_user(current_user)}
