"""User actions: mutate the state, talk to the API, re-render."""

from __future__ import annotations

from datetime import datetime
import logging

import pytz

from beer_client import api_client
from beer_client.api_client import make_login_hash
from beer_client.render import (
    render,
    render_error_message,
    render_logged_in_banner,
    NOT_FOUND_MESSAGE,
    USERNAME_TAKEN_MESSAGE,
    AUTH_ERROR_MESSAGE,
    SIGNUP_ERROR_MESSAGE,
)
from beer_client.storage import LOGIN_HASH_KEY, USER_ID_KEY

logger = logging.getLogger(__name__)

SEARCH = "search"
AUTH = "auth"


class BeerReviewController:
    """Runs each user action as mutate, request, mutate, render.

    Search and login/signup requests are tagged with a generation token.
    A response that comes back after a newer request of the same kind was
    issued is dropped without touching the state.
    """

    def __init__(self, state, page, storage, api=None):
        self.state = state
        self.page = page
        self.storage = storage
        self.api = api if api is not None else api_client
        self._generation = 0
        self._latest = {}

    def _issue_token(self, kind: str) -> int:
        self._generation += 1
        self._latest[kind] = self._generation
        return self._generation

    def _is_stale(self, kind: str, token: int) -> bool:
        return self._latest.get(kind) != token

    def render(self) -> None:
        render(self.state, self.page)

    def load_session(self) -> bool:
        """Pick up a login saved by a previous run."""
        if not self.storage.get_item(LOGIN_HASH_KEY):
            return False
        self.state.set_current_user_id(self.storage.get_item(USER_ID_KEY) or "")
        if not self.state.user_logged_in:
            self.state.toggle_user_logged_in()
        self.render()
        return True

    def show_search_form(self) -> None:
        self.state.set_search_form_visible()
        self.render()

    def submit_search(self, query: str) -> bool:
        self.state.reset_state()
        return self.fetch_beer_data(query)

    def fetch_beer_data(self, query: str) -> bool:
        """Look ``query`` up by exact name. Returns whether a beer matched."""
        token = self._issue_token(SEARCH)
        result = self.api.fetch_beers()

        if self._is_stale(SEARCH, token):
            logger.debug("Dropping stale search response for %r", query)
            return False
        if not result.get("success"):
            logger.warning("Search for %r failed: %s", query, result.get("detail"))
            return False

        found = False
        for beer in result.get("beers", []):
            if beer.get("name") == query:
                found = True
                self.state.set_search_beer_id(beer.get("id", ""))
                self.state.mark_query_found()
                self.state.set_beer_data(beer)
                self.render()

        if not found:
            self.state.set_beer_data(None)
            render_error_message(self.page, NOT_FOUND_MESSAGE)
        return found

    def open_review_entry(self) -> None:
        if not (self.state.beer_data or {}).get("name"):
            logger.debug("Review entry requested with no beer on screen")
            return
        self.state.toggle_review_entry()
        self.render()

    def send_review_data(self, text: str) -> bool:
        login_hash = self.storage.get_item(LOGIN_HASH_KEY)
        if not login_hash:
            logger.warning("Cannot post a review without a stored login")
            return False

        beer_id = self.state.search_beer_id
        if not beer_id:
            logger.warning("Cannot post a review with no beer selected")
            return False

        payload = {
            "id": beer_id,
            "reviews": [{
                "author": {"_id": self.state.current_user_id},
                "comment": text,
                "date": datetime.now(pytz.utc).isoformat(),
            }],
        }
        result = self.api.add_review(beer_id, payload, login_hash)
        if not result.get("success"):
            logger.warning("Review for beer %s not saved: %s", beer_id, result.get("detail"))
            return False

        beer_name = (self.state.beer_data or {}).get("name")
        self.state.clear_review_entry()
        self.fetch_beer_data(beer_name)
        return True

    def login_user(self, username: str, password: str) -> bool:
        token = self._issue_token(AUTH)
        login_hash = make_login_hash(username, password)
        result = self.api.login_user(login_hash)

        if self._is_stale(AUTH, token):
            logger.debug("Dropping stale login response for %s", username)
            return False
        if result.get("success"):
            self._complete_login(login_hash, result.get("user") or {})
            return True
        if result.get("status_code") == 422:
            render_error_message(self.page, AUTH_ERROR_MESSAGE)
        else:
            logger.warning("Login for %s failed: %s", username, result.get("detail"))
        return False

    def create_user(self, user_data: dict) -> bool:
        token = self._issue_token(AUTH)
        result = self.api.create_user(user_data)

        if self._is_stale(AUTH, token):
            logger.debug("Dropping stale signup response for %s", user_data.get("username"))
            return False
        if result.get("success"):
            login_hash = make_login_hash(user_data.get("username", ""), user_data.get("password", ""))
            self._complete_login(login_hash, result.get("user") or {})
            return True
        if result.get("status_code") == 422:
            detail = str(result.get("detail", ""))
            message = USERNAME_TAKEN_MESSAGE if "taken" in detail.lower() else SIGNUP_ERROR_MESSAGE
            render_error_message(self.page, message)
        else:
            logger.warning("Signup for %s failed: %s", user_data.get("username"), result.get("detail"))
        return False

    def _complete_login(self, login_hash: str, user: dict) -> None:
        user_id = user.get("_id", "")
        self.storage.set_item(LOGIN_HASH_KEY, login_hash)
        self.storage.set_item(USER_ID_KEY, user_id)
        self.state.set_current_user_id(user_id)
        if not self.state.user_logged_in:
            self.state.toggle_user_logged_in()
        self.render()
        render_logged_in_banner(self.page, user.get("username", ""))

    def logout(self) -> None:
        self.storage.remove_item(LOGIN_HASH_KEY)
        self.storage.remove_item(USER_ID_KEY)
        if self.state.user_logged_in:
            self.state.toggle_user_logged_in()
        self.state.set_current_user_id("")
        self.page.reset()
        self.render()
