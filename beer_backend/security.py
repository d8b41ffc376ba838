import base64
import binascii
from typing import Optional

import bcrypt
from fastapi import HTTPException, Request
from sqlalchemy import text

from .database import engine


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash or over-long password
        return False


def parse_basic_auth(header: Optional[str]):
    """Split an ``Authorization: Basic ...`` header into (username, password).

    Returns None for a missing or malformed header.
    """
    if not header:
        return None
    scheme, _, encoded = header.partition(" ")
    if scheme.lower() != "basic" or not encoded:
        return None
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password


def authenticate(header: Optional[str]):
    """Look up the user behind a Basic-auth header and check the password."""
    credentials = parse_basic_auth(header)
    if credentials is None:
        return None
    username, password = credentials

    query = text("""
        SELECT user_id, username, password_hash, first_name, last_name
        FROM users
        WHERE username = :username
    """)
    with engine.connect() as conn:
        row = conn.execute(query, {"username": username}).fetchone()
    if row and verify_password(password, row.password_hash):
        return row
    return None


def require_user(request: Request):
    """Route dependency for write endpoints."""
    user = authenticate(request.headers.get("Authorization"))
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return user
