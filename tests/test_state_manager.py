from beer_client.state_manager import AppState


def test_new_state_is_empty():
    state = AppState()

    assert state.as_dict() == {
        "beer_data": None,
        "user_logged_in": False,
        "user_query_in_db": False,
        "review_entry": False,
        "search_beer_id": "",
        "current_user_id": "",
        "show_search_form": False,
    }


def test_reset_state_is_idempotent():
    state = AppState()
    state.set_search_form_visible()
    state.set_search_beer_id("abc")
    state.mark_query_found()
    state.toggle_review_entry()

    state.reset_state()
    once = state.as_dict()
    state.reset_state()

    assert state.as_dict() == once
    assert state.search_beer_id == ""
    assert state.user_query_in_db is False
    assert state.review_entry is False
    assert state.show_search_form is False


def test_reset_state_keeps_login():
    state = AppState()
    state.toggle_user_logged_in()
    state.set_current_user_id("user-1")

    state.reset_state()

    assert state.user_logged_in is True
    assert state.current_user_id == "user-1"


def test_toggles_flip():
    state = AppState()

    state.toggle_user_logged_in()
    state.toggle_review_entry()
    assert state.user_logged_in is True
    assert state.review_entry is True

    state.toggle_user_logged_in()
    state.toggle_review_entry()
    assert state.user_logged_in is False
    assert state.review_entry is False


def test_clear_review_entry_forces_false():
    state = AppState()
    state.clear_review_entry()
    assert state.review_entry is False

    state.toggle_review_entry()
    state.clear_review_entry()
    assert state.review_entry is False


def test_set_search_form_visible_is_idempotent():
    state = AppState()
    state.set_search_form_visible()
    state.set_search_form_visible()

    assert state.show_search_form is True


def test_set_beer_data_replaces_record():
    state = AppState()
    state.set_beer_data({"name": "First", "style": "IPA"})
    state.set_beer_data({"name": "Second"})

    assert state.beer_data == {"name": "Second"}

    state.set_beer_data(None)
    assert state.beer_data is None
