import logging
from typing import Any, Dict, Optional

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from database import create_document, serialize_doc
from errors import AuthenticationError, ConflictError
from payloads import LoginPayload, RegisterPayload
from schemas import User
from security import hash_password, verify_password

log = logging.getLogger(__name__)

PHONE_EXISTS = "User with this phone number already exists"
EMAIL_EXISTS = "User with this email address already exists"
INVALID_CREDENTIALS = "Invalid credentials"


def sanitize_user(user: Dict[str, Any]) -> Dict[str, Any]:
    return serialize_doc({k: v for k, v in user.items() if k != "password"})


class AuthService:
    def __init__(self, db: Database):
        self.db = db
        self.users = db["user"]

    def _ensure_available(self, phone_number: str, email_address: Optional[str] = None) -> None:
        if self.users.find_one({"phoneNumber": phone_number}):
            raise ConflictError(PHONE_EXISTS)
        if email_address and self.users.find_one({"emailAddress": email_address}):
            raise ConflictError(EMAIL_EXISTS)

    def register(self, payload: RegisterPayload) -> Dict[str, Any]:
        """Create a user. Returns the sanitized user (no password)."""
        self._ensure_available(payload.phoneNumber, payload.emailAddress)

        user = User(
            firstName=payload.firstName,
            lastName=payload.lastName,
            phoneNumber=payload.phoneNumber,
            address=payload.address,
            emailAddress=payload.emailAddress,
            password=hash_password(payload.password),
            role=payload.role or "customer",
        )
        try:
            doc = create_document(self.db, "user", user)
        except DuplicateKeyError:
            # Lost a race with a concurrent registration; report which key clashed.
            self._ensure_available(payload.phoneNumber, payload.emailAddress)
            raise
        log.info("Registered user %s with role %s", doc["_id"], doc["role"])
        return sanitize_user(doc)

    def login(self, payload: LoginPayload) -> Dict[str, Any]:
        # Same error whether the phone number is unknown or the password is wrong.
        user = self.users.find_one({"phoneNumber": payload.phoneNumber})
        if not user or not user.get("password"):
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not verify_password(payload.password, user["password"]):
            raise AuthenticationError(INVALID_CREDENTIALS)
        return sanitize_user(user)
