from PyQt5.QtWidgets import (
    QMainWindow, QVBoxLayout, QHBoxLayout, QWidget, QPushButton, QLabel,
    QLineEdit, QTextBrowser, QPlainTextEdit, QFormLayout
)
from PyQt5.QtCore import Qt

from beer_client.render import (
    RESULTS, BEER_FORM, STARTER_PAGE, LOGIN_ERROR, LOGGED_IN, LOGIN_FORM,
    SIGNUP_FORM, SHOW_RESULTS_BUTTON, LOGOUT_BUTTON, REVIEW_FORM_HTML
)

REVIEW_FORM_CLASS = "js-review-form"
REVIEW_ANCHOR = "leave-review"


class MainWindow(QMainWindow):
    """Shows the controller's page and forwards user actions to it.

    Every page region is bound to one widget. After each action the widgets
    are repainted from the page.
    """

    def __init__(self, controller):
        super().__init__()
        self.controller = controller
        self.setWindowTitle("Beer Reviews")
        self.resize(640, 720)

        # --- starter page ---
        self.starter_label = QLabel("Look up a beer and see what people think of it.")
        self.starter_label.setWordWrap(True)
        self.show_results_button = QPushButton("Search Beers")
        self.show_results_button.clicked.connect(self.handle_show_search)

        # --- search ---
        self.beer_name_input = QLineEdit()
        self.beer_name_input.setPlaceholderText("Beer name")
        self.beer_name_input.returnPressed.connect(self.handle_search)
        self.search_button = QPushButton("Search")
        self.search_button.clicked.connect(self.handle_search)
        self.beer_form = QWidget()
        beer_row = QHBoxLayout(self.beer_form)
        beer_row.setContentsMargins(0, 0, 0, 0)
        beer_row.addWidget(self.beer_name_input)
        beer_row.addWidget(self.search_button)

        # --- results + review entry ---
        self.results = QTextBrowser()
        self.results.setOpenLinks(False)
        self.results.anchorClicked.connect(self.handle_anchor)

        self.review_input = QPlainTextEdit()
        self.review_input.setPlaceholderText("Your review")
        self.review_submit_button = QPushButton("Submit Review")
        self.review_submit_button.clicked.connect(self.handle_review_submit)
        self.review_panel = QWidget()
        review_layout = QVBoxLayout(self.review_panel)
        review_layout.setContentsMargins(0, 0, 0, 0)
        review_layout.addWidget(self.review_input)
        review_layout.addWidget(self.review_submit_button)

        # --- banners ---
        self.error_label = QLabel()
        self.error_label.setObjectName("errorLabel")
        self.error_label.setTextFormat(Qt.RichText)
        self.logged_in_label = QLabel()
        self.logged_in_label.setTextFormat(Qt.RichText)

        # --- login ---
        self.login_username = QLineEdit()
        self.login_password = QLineEdit()
        self.login_password.setEchoMode(QLineEdit.Password)
        self.login_password.returnPressed.connect(self.handle_login)
        self.login_button = QPushButton("Login")
        self.login_button.clicked.connect(self.handle_login)
        self.login_form = QWidget()
        login_layout = QFormLayout(self.login_form)
        login_layout.addRow("Username:", self.login_username)
        login_layout.addRow("Password:", self.login_password)
        login_layout.addRow("", self.login_button)

        # --- signup ---
        self.signup_first_name = QLineEdit()
        self.signup_last_name = QLineEdit()
        self.signup_username = QLineEdit()
        self.signup_password = QLineEdit()
        self.signup_password.setEchoMode(QLineEdit.Password)
        self.signup_button = QPushButton("Create Account")
        self.signup_button.clicked.connect(self.handle_signup)
        self.signup_form = QWidget()
        signup_layout = QFormLayout(self.signup_form)
        signup_layout.addRow("First name:", self.signup_first_name)
        signup_layout.addRow("Last name:", self.signup_last_name)
        signup_layout.addRow("Username:", self.signup_username)
        signup_layout.addRow("Password:", self.signup_password)
        signup_layout.addRow("", self.signup_button)

        self.logout_button = QPushButton("Logout")
        self.logout_button.setObjectName("logoutButton")
        self.logout_button.clicked.connect(self.handle_logout)

        self.region_widgets = {
            STARTER_PAGE: self.starter_label,
            SHOW_RESULTS_BUTTON: self.show_results_button,
            BEER_FORM: self.beer_form,
            RESULTS: self.results,
            LOGIN_ERROR: self.error_label,
            LOGGED_IN: self.logged_in_label,
            LOGIN_FORM: self.login_form,
            SIGNUP_FORM: self.signup_form,
            LOGOUT_BUTTON: self.logout_button,
        }

        layout = QVBoxLayout()
        layout.addWidget(self.logged_in_label)
        layout.addWidget(self.error_label)
        layout.addWidget(self.starter_label)
        layout.addWidget(self.show_results_button)
        layout.addWidget(self.beer_form)
        layout.addWidget(self.results)
        layout.addWidget(self.review_panel)
        layout.addWidget(self.login_form)
        layout.addWidget(self.signup_form)
        layout.addWidget(self.logout_button)
        layout.addStretch()

        container = QWidget()
        container.setLayout(layout)
        self.setCentralWidget(container)

        self.refresh()

    def refresh(self):
        page = self.controller.page
        for name, widget in self.region_widgets.items():
            region = page.region(name)
            widget.setVisible(not region.hidden)
            if widget is self.results:
                # the review form is a native widget, not part of the browser text
                self.results.setHtml(region.html.replace(REVIEW_FORM_HTML, ""))
            elif isinstance(widget, QLabel) and name != STARTER_PAGE:
                widget.setText(region.html)

        show_review = not page.is_hidden(RESULTS) and page.contains(RESULTS, REVIEW_FORM_CLASS)
        self.review_panel.setVisible(show_review)

    def handle_show_search(self):
        self.controller.show_search_form()
        self.refresh()
        self.beer_name_input.setFocus()

    def handle_search(self):
        query = self.beer_name_input.text().strip()
        if not query:
            return
        self.controller.submit_search(query)
        self.refresh()

    def handle_anchor(self, url):
        if url.fragment() == REVIEW_ANCHOR:
            self.controller.open_review_entry()
            self.refresh()

    def handle_review_submit(self):
        text = self.review_input.toPlainText().strip()
        if not text:
            return
        if self.controller.send_review_data(text):
            self.review_input.clear()
        self.refresh()

    def handle_login(self):
        username = self.login_username.text().strip()
        password = self.login_password.text()
        self.controller.login_user(username, password)
        self.login_password.clear()
        self.refresh()

    def handle_signup(self):
        user_data = {
            "firstName": self.signup_first_name.text().strip(),
            "lastName": self.signup_last_name.text().strip(),
            "username": self.signup_username.text(),
            "password": self.signup_password.text(),
        }
        if self.controller.create_user(user_data):
            for field in (self.signup_first_name, self.signup_last_name,
                          self.signup_username, self.signup_password):
                field.clear()
        self.refresh()

    def handle_logout(self):
        self.controller.logout()
        self.refresh()
