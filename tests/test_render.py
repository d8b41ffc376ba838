import re

from beer_client.render import (
    Page, render, render_error_message, render_logged_in_banner,
    RESULTS, BEER_FORM, STARTER_PAGE, LOGIN_ERROR, LOGGED_IN, LOGIN_FORM,
    SIGNUP_FORM, LOGOUT_BUTTON, REVIEW_FORM_HTML,
)
from beer_client.state_manager import AppState

LAGER = {
    "id": "abc",
    "name": "Lager77",
    "style": "Helles",
    "abv": 4.8,
    "ibu": 18,
    "description": "Crisp and bready.",
    "brewery": "Seventy Seven",
    "reviews": [
        {"author": {"firstName": "Ada", "lastName": "Lovelace"}, "comment": "Lovely head.", "date": "2024-01-01"},
        {"author": {"firstName": "Alan", "lastName": "Turing"}, "comment": "Decidedly good.", "date": "2024-01-02"},
    ],
}


def state_with(**flags):
    state = AppState()
    if flags.get("beer") is not None:
        state.set_beer_data(flags["beer"])
    if flags.get("review_entry"):
        state.toggle_review_entry()
    if flags.get("logged_in"):
        state.toggle_user_logged_in()
    if flags.get("search_form"):
        state.set_search_form_visible()
    return state


def list_items(html):
    return re.findall(r"<li>(.*?)</li>", html)


def test_initial_page_layout():
    page = Page.initial()

    assert page.is_hidden(RESULTS)
    assert page.is_hidden(BEER_FORM)
    assert not page.is_hidden(STARTER_PAGE)
    assert not page.is_hidden(LOGIN_FORM)
    assert not page.is_hidden(SIGNUP_FORM)
    assert page.is_hidden(LOGOUT_BUTTON)


def test_search_form_flag_swaps_starter_page():
    page = Page.initial()

    render(state_with(search_form=True), page)

    assert not page.is_hidden(BEER_FORM)
    assert page.is_hidden(STARTER_PAGE)


def test_search_form_composes_with_beer_info():
    page = Page.initial()

    render(state_with(search_form=True, beer=LAGER), page)

    assert not page.is_hidden(BEER_FORM)
    assert "Beer Name: Lager77" in page.html(RESULTS)


def test_banners_hidden_on_every_pass():
    page = Page.initial()
    render_error_message(page, "Nope")
    render_logged_in_banner(page, "ada")
    assert not page.is_hidden(LOGIN_ERROR)
    assert not page.is_hidden(LOGGED_IN)

    render(AppState(), page)

    assert page.is_hidden(LOGIN_ERROR)
    assert page.is_hidden(LOGGED_IN)


def test_beer_info_lists_every_review():
    page = Page.initial()

    render(state_with(beer=LAGER), page)

    html = page.html(RESULTS)
    assert not page.is_hidden(RESULTS)
    assert "<h2>Beer Name: Lager77</h2>" in html
    for label, value in (("Style", "Helles"), ("ABV", "4.8"), ("IBU", "18"),
                         ("Description", "Crisp and bready."), ("Brewery", "Seventy Seven")):
        assert f"<p>{label}: {value}</p>" in html

    items = list_items(html)
    assert len(items) == len(LAGER["reviews"])
    for item, review in zip(items, LAGER["reviews"]):
        assert review["author"]["firstName"] in item
        assert review["author"]["lastName"] in item
        assert review["comment"] in item
    assert 'class="js-review"' in html


def test_empty_reviews_render_empty_list():
    page = Page.initial()

    render(state_with(beer={"name": "X", "reviews": []}), page)

    assert "<ul></ul>" in page.html(RESULTS)


def test_missing_reviews_render_empty_list():
    page = Page.initial()

    render(state_with(beer={"name": "X"}), page)

    assert "<ul></ul>" in page.html(RESULTS)


def test_headings_are_closed():
    page = Page.initial()

    render(state_with(beer=LAGER), page)

    html = page.html(RESULTS)
    assert html.count("<h2>") == html.count("</h2>") == 1


def test_values_are_escaped():
    page = Page.initial()
    beer = {
        "name": "<script>alert(1)</script>",
        "reviews": [{"author": {"firstName": "Bob", "lastName": "&Co"}, "comment": "<b>loud</b>"}],
    }

    render(state_with(beer=beer), page)

    html = page.html(RESULTS)
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "&amp;Co" in html
    assert "&lt;b&gt;loud&lt;/b&gt;" in html


def test_review_entry_takes_precedence():
    page = Page.initial()

    render(state_with(beer=LAGER, review_entry=True, logged_in=True), page)

    html = page.html(RESULTS)
    assert 'class="js-review-form"' in html
    assert "Beer Name:" not in html
    # the logged-in branch did not run either
    assert not page.is_hidden(LOGIN_FORM)
    assert page.is_hidden(LOGOUT_BUTTON)


def test_review_form_is_appended_to_beer_info():
    page = Page.initial()
    state = state_with(beer=LAGER)
    render(state, page)

    state.toggle_review_entry()
    render(state, page)

    html = page.html(RESULTS)
    assert "Beer Name: Lager77" in html
    assert html.endswith(REVIEW_FORM_HTML)


def test_beer_info_takes_precedence_over_login():
    page = Page.initial()

    render(state_with(beer=LAGER, logged_in=True), page)

    assert "Beer Name: Lager77" in page.html(RESULTS)
    assert not page.is_hidden(LOGIN_FORM)


def test_logged_in_hides_auth_forms():
    page = Page.initial()

    render(state_with(logged_in=True), page)

    assert page.is_hidden(LOGIN_FORM)
    assert page.is_hidden(SIGNUP_FORM)
    assert not page.is_hidden(LOGOUT_BUTTON)


def test_nothing_matches_leaves_page_alone():
    page = Page.initial()
    page.set_html(RESULTS, "<p>previous</p>")
    page.show(RESULTS)
    before = page.snapshot()

    render(AppState(), page)

    assert page.snapshot() == before


def test_same_state_renders_same_page():
    states = [
        state_with(),
        state_with(search_form=True),
        state_with(beer=LAGER),
        state_with(beer=LAGER, review_entry=True),
        state_with(logged_in=True, search_form=True),
    ]
    for state in states:
        first, second = Page.initial(), Page.initial()
        render(state, first)
        render(state, second)
        assert first.snapshot() == second.snapshot()


def test_error_message_is_escaped():
    page = Page.initial()

    render_error_message(page, "<oops>")

    assert page.html(LOGIN_ERROR) == "<p>&lt;oops&gt;</p>"
    assert not page.is_hidden(LOGIN_ERROR)


def test_page_reset_restores_layout():
    page = Page.initial()
    render(state_with(logged_in=True, search_form=True), page)

    page.reset()

    assert page.snapshot() == Page.initial().snapshot()


def test_missing_fields_render_blank():
    page = Page.initial()

    render(state_with(beer={"name": "X", "style": None, "reviews": [{"author": {}, "comment": None}]}), page)

    html = page.html(RESULTS)
    assert "None" not in html
    assert "<p>Style: </p>" in html
    assert "<p>ABV: </p>" in html


def test_logged_in_banner_is_escaped():
    page = Page.initial()

    render_logged_in_banner(page, "<ada>")

    assert page.html(LOGGED_IN) == "<p>Logged in as &lt;ada&gt;</p>"
