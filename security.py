"""
Password hashing, token signing and the authorization gates.

Authorization is stateless: the signed token carries the identity and role.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext

from config import get_settings

JWT_ALGO = "HS256"
TOKEN_CLAIMS = ("firstName", "lastName", "phoneNumber", "emailAddress", "role")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)
security = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(password, hashed)
    except ValueError:
        # Unrecognised or malformed hash
        return False


def create_token(user: Dict[str, Any]) -> str:
    settings = get_settings()
    exp = datetime.now(timezone.utc) + timedelta(hours=settings.jwt_expires_hours)
    to_encode = {"id": str(user.get("id") or user.get("_id"))}
    to_encode.update({claim: user.get(claim) for claim in TOKEN_CLAIMS})
    to_encode["exp"] = exp
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=JWT_ALGO)


def decode_token(token: str) -> Dict[str, Any]:
    return jwt.decode(token, get_settings().jwt_secret, algorithms=[JWT_ALGO])


def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> Dict[str, Any]:
    # Every failure gets the same answer.
    if credentials is None or not credentials.credentials.strip():
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        return decode_token(credentials.credentials.strip())
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Unauthorized")


def require_admin(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
