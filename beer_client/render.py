"""Render projector.

``render`` reads an :class:`AppState` and writes a :class:`Page`, a plain
description of the screen made of named regions. Region names follow the
CSS classes of the web client (``js-results``, ``js-beer-form`` ...), so a
view can bind them to widgets, HTML elements or a test snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass

from jinja2 import DictLoader, Environment

RESULTS = "js-results"
BEER_FORM = "js-beer-form"
STARTER_PAGE = "js-starter-page"
LOGIN_ERROR = "js-login-error"
LOGGED_IN = "js-loggedIn"
LOGIN_FORM = "js-login-form"
SIGNUP_FORM = "js-signup-form"
SHOW_RESULTS_BUTTON = "js-show-results-button"
LOGOUT_BUTTON = "js-logout-button"

# region -> hidden at page load
INITIAL_LAYOUT = {
    RESULTS: True,
    BEER_FORM: True,
    STARTER_PAGE: False,
    LOGIN_ERROR: True,
    LOGGED_IN: True,
    LOGIN_FORM: False,
    SIGNUP_FORM: False,
    SHOW_RESULTS_BUTTON: False,
    LOGOUT_BUTTON: True,
}

NOT_FOUND_MESSAGE = "Sorry, that beer is not in our database yet."
USERNAME_TAKEN_MESSAGE = "That username is already taken."
AUTH_ERROR_MESSAGE = "Incorrect username or password."
SIGNUP_ERROR_MESSAGE = "Please fill in a username and password without surrounding spaces."

TEMPLATES = {
    "beer.html": (
        "<h2>Beer Name: {{ beer.name }}</h2>"
        "<p>Style: {{ beer.style }}</p>"
        "<p>ABV: {{ beer.abv }}</p>"
        "<p>IBU: {{ beer.ibu }}</p>"
        "<p>Description: {{ beer.description }}</p>"
        "<p>Brewery: {{ beer.brewery }}</p>"
        "<h3>Reviews:</h3>"
        "<ul>"
        "{% for review in reviews %}"
        "<li><p>{{ review.first_name }} {{ review.last_name }}: {{ review.comment }}</p></li>"
        "{% endfor %}"
        "</ul>"
        '<a class="js-review" href="#leave-review">Click to leave a review</a>'
    ),
    "review_form.html": (
        '<form class="js-review-form">'
        '<label for="review-text">Your review</label>'
        '<textarea id="review-text" name="review"></textarea>'
        '<button type="submit">Submit review</button>'
        '</form>'
    ),
    "banner.html": "<p>{{ message }}</p>",
}

templates = Environment(loader=DictLoader(TEMPLATES), autoescape=True)

REVIEW_FORM_HTML = templates.get_template("review_form.html").render()


@dataclass
class Region:
    hidden: bool = False
    html: str = ""


class Page:
    """Named regions of the screen."""

    def __init__(self, regions: dict[str, Region] | None = None) -> None:
        self.regions = regions if regions is not None else {}

    @classmethod
    def initial(cls) -> "Page":
        page = cls()
        page.reset()
        return page

    def reset(self) -> None:
        """Restore the page-load layout."""
        self.regions = {name: Region(hidden=hidden) for name, hidden in INITIAL_LAYOUT.items()}

    def region(self, name: str) -> Region:
        return self.regions.setdefault(name, Region())

    def show(self, name: str) -> None:
        self.region(name).hidden = False

    def hide(self, name: str) -> None:
        self.region(name).hidden = True

    def set_html(self, name: str, html: str) -> None:
        self.region(name).html = html

    def append_html(self, name: str, html: str) -> None:
        self.region(name).html += html

    def is_hidden(self, name: str) -> bool:
        return self.region(name).hidden

    def html(self, name: str) -> str:
        return self.region(name).html

    def contains(self, name: str, css_class: str) -> bool:
        return f'class="{css_class}"' in self.region(name).html

    def snapshot(self) -> dict[str, tuple[bool, str]]:
        return {name: (region.hidden, region.html) for name, region in self.regions.items()}


BEER_FIELDS = ("name", "style", "abv", "ibu", "description", "brewery")


def _blank(value):
    return "" if value is None else value


def render_beer(beer: dict) -> str:
    reviews = []
    for review in beer.get("reviews") or []:
        author = review.get("author") or {}
        reviews.append({
            "first_name": _blank(author.get("firstName")),
            "last_name": _blank(author.get("lastName")),
            "comment": _blank(review.get("comment")),
        })
    fields = {name: _blank(beer.get(name)) for name in BEER_FIELDS}
    return templates.get_template("beer.html").render(beer=fields, reviews=reviews)


def render(state, page: Page) -> None:
    """Project ``state`` onto ``page``.

    The search-form check runs on every pass. After it, exactly one of the
    review form, the beer info or the logged-in layout is produced, in that
    order of precedence. Nothing else is touched, so regions keep whatever a
    previous pass left in them.
    """
    if state.show_search_form:
        page.show(BEER_FORM)
        page.hide(STARTER_PAGE)

    page.hide(LOGIN_ERROR)
    page.hide(LOGGED_IN)

    beer = state.beer_data or {}

    if state.review_entry:
        page.append_html(RESULTS, REVIEW_FORM_HTML)
    elif beer.get("name") is not None:
        page.set_html(RESULTS, render_beer(beer))
        page.show(RESULTS)
    elif state.user_logged_in:
        page.hide(LOGIN_FORM)
        page.hide(SIGNUP_FORM)
        page.show(LOGOUT_BUTTON)


def render_error_message(page: Page, message: str) -> None:
    page.set_html(LOGIN_ERROR, templates.get_template("banner.html").render(message=message))
    page.show(LOGIN_ERROR)


def render_logged_in_banner(page: Page, username: str) -> None:
    page.set_html(LOGGED_IN, templates.get_template("banner.html").render(message=f"Logged in as {username}"))
    page.show(LOGGED_IN)
