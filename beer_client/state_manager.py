class AppState:
    """Client session state.

    One instance is created at start-up and handed to the controller and the
    render projector. Fields are only written through the methods below.
    """

    def __init__(self):
        self.beer_data = None
        self.user_logged_in = False
        self.user_query_in_db = False
        self.review_entry = False
        self.search_beer_id = ""
        self.current_user_id = ""
        self.show_search_form = False

    def reset_state(self):
        # login status and user id survive a new search
        self.review_entry = False
        self.user_query_in_db = False
        self.search_beer_id = ""
        self.show_search_form = False

    def set_search_form_visible(self):
        self.show_search_form = True

    def toggle_user_logged_in(self):
        self.user_logged_in = not self.user_logged_in

    def set_current_user_id(self, user_id):
        self.current_user_id = user_id

    def set_beer_data(self, beer):
        self.beer_data = beer

    def mark_query_found(self):
        self.user_query_in_db = True

    def set_search_beer_id(self, beer_id):
        self.search_beer_id = beer_id

    def toggle_review_entry(self):
        self.review_entry = not self.review_entry

    def clear_review_entry(self):
        self.review_entry = False

    def as_dict(self):
        return dict(vars(self))
