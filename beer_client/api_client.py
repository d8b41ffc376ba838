import base64
import logging
import os
from dotenv import load_dotenv
import requests

# Load .env file from the working directory
load_dotenv()

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "5"))

logger = logging.getLogger(__name__)


def make_login_hash(username, password):
    return base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")


def _auth_headers(login_hash):
    return {"Authorization": f"Basic {login_hash}"}


def _detail(r):
    try:
        data = r.json()
    except ValueError:
        return r.text
    return data.get("detail", r.text) if isinstance(data, dict) else r.text


def ping_server():
    try:
        r = requests.get(f"{API_BASE_URL}/ping", timeout=3)
        return r.status_code == 200
    except requests.RequestException as e:
        logger.warning("Ping failed: %s", e)
        return False


def fetch_beers():
    try:
        r = requests.get(f"{API_BASE_URL}/beers", timeout=REQUEST_TIMEOUT)
        if r.status_code != 200:
            logger.warning("Failed to fetch beers: %s %s", r.status_code, r.text)
            return {"success": False, "status_code": r.status_code, "detail": _detail(r)}
        data = r.json()
        beers = data.get("beers", []) if isinstance(data, dict) else None
        if not isinstance(beers, list):
            logger.warning("Unexpected beers payload: %r", data)
            return {"success": False, "status_code": r.status_code, "detail": "Malformed beer list"}
        return {"success": True, "status_code": r.status_code,
                "beers": [beer for beer in beers if isinstance(beer, dict)]}
    except (requests.RequestException, ValueError) as e:
        logger.warning("Error fetching beers: %s", e)
        return {"success": False, "status_code": None, "detail": str(e)}


def add_review(beer_id, payload, login_hash):
    try:
        r = requests.put(
            f"{API_BASE_URL}/beers/{beer_id}",
            json=payload,
            headers=_auth_headers(login_hash),
            timeout=REQUEST_TIMEOUT
        )
        if r.status_code == 204:
            return {"success": True, "status_code": r.status_code}
        logger.warning("Review rejected: %s %s", r.status_code, r.text)
        return {"success": False, "status_code": r.status_code, "detail": _detail(r)}
    except requests.RequestException as e:
        logger.warning("Review submission failed: %s", e)
        return {"success": False, "status_code": None, "detail": str(e)}


def _user_result(r):
    user = r.json()
    if not isinstance(user, dict):
        logger.warning("Unexpected user payload: %r", user)
        return {"success": False, "status_code": r.status_code, "detail": "Malformed user record"}
    return {"success": True, "status_code": r.status_code, "user": user}


def login_user(login_hash):
    try:
        r = requests.get(
            f"{API_BASE_URL}/users/login",
            headers=_auth_headers(login_hash),
            timeout=REQUEST_TIMEOUT
        )
        logger.debug("Login response: %s", r.status_code)
        if r.status_code == 200:
            return _user_result(r)
        return {"success": False, "status_code": r.status_code, "detail": _detail(r)}
    except (requests.RequestException, ValueError) as e:
        logger.warning("Login failed: %s", e)
        return {"success": False, "status_code": None, "detail": str(e)}


def create_user(user_data):
    try:
        r = requests.post(f"{API_BASE_URL}/users", json=user_data, timeout=REQUEST_TIMEOUT)
        if r.status_code == 201:
            return _user_result(r)
        return {"success": False, "status_code": r.status_code, "detail": _detail(r)}
    except (requests.RequestException, ValueError) as e:
        logger.warning("Signup failed: %s", e)
        return {"success": False, "status_code": None, "detail": str(e)}
