from typing import Any

from fastapi import APIRouter, Body, Depends
from pymongo.database import Database

from database import get_db
from errors import envelope
from payloads import LoginPayload, RegisterPayload
from routers.common import parse_body
from security import create_token
from services import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def get_service(db: Database = Depends(get_db)) -> AuthService:
    return AuthService(db)


@router.post("/register", status_code=201)
def register(body: Any = Body(None), service: AuthService = Depends(get_service)):
    payload = parse_body(
        RegisterPayload,
        body,
        "Invalid request body. Required fields: firstName, lastName, phoneNumber, address, password",
    )
    user = service.register(payload)
    return envelope("User created successfully", {"user": user, "token": create_token(user)})


@router.post("/login")
def login(body: Any = Body(None), service: AuthService = Depends(get_service)):
    payload = parse_body(LoginPayload, body, "Invalid request body. Required fields: phoneNumber, password")
    user = service.login(payload)
    return envelope("Login successful", {"user": user, "token": create_token(user)})
