from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel
from sqlalchemy import text
from uuid import uuid4
import logging

from ..database import engine
from ..security import hash_password, authenticate

logger = logging.getLogger(__name__)

router = APIRouter()

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


class NewUser(BaseModel):
    username: str
    password: str
    firstName: str = ""
    lastName: str = ""


def serialize_user(row):
    return {
        "_id": row.user_id,
        "username": row.username,
        "firstName": row.first_name,
        "lastName": row.last_name,
    }


@router.post("/users", status_code=201)
def create_user(user: NewUser):
    for field in ("username", "password"):
        value = getattr(user, field)
        if not value:
            raise HTTPException(status_code=422, detail=f"Missing field: {field}")
        if value != value.strip():
            raise HTTPException(status_code=422, detail=f"{field} cannot start or end with whitespace")

    if len(user.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise HTTPException(status_code=422, detail=f"password must be at most {MAX_PASSWORD_BYTES} bytes")

    with engine.begin() as conn:
        existing = conn.execute(
            text("SELECT 1 FROM users WHERE username = :username"),
            {"username": user.username}
        ).fetchone()
        if existing:
            raise HTTPException(status_code=422, detail="Username already taken")

        user_id = uuid4().hex
        conn.execute(
            text("""
                INSERT INTO users (user_id, username, password_hash, first_name, last_name)
                VALUES (:user_id, :username, :password_hash, :first_name, :last_name)
            """),
            {
                "user_id": user_id,
                "username": user.username,
                "password_hash": hash_password(user.password),
                "first_name": user.firstName.strip(),
                "last_name": user.lastName.strip(),
            }
        )

    logger.info("Created user %s (%s)", user.username, user_id)
    return {
        "_id": user_id,
        "username": user.username,
        "firstName": user.firstName.strip(),
        "lastName": user.lastName.strip(),
    }


@router.get("/users/login")
def login(request: Request):
    user = authenticate(request.headers.get("Authorization"))
    if user is None:
        raise HTTPException(status_code=422, detail="Incorrect username or password")
    return serialize_user(user)
