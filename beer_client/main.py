import logging
import os
import sys

from dotenv import load_dotenv
from PyQt5.QtWidgets import QApplication

from beer_client.api_client import API_BASE_URL, ping_server
from beer_client.controller import BeerReviewController
from beer_client.render import Page
from beer_client.state_manager import AppState
from beer_client.storage import LocalStorage
from beer_client.ui_main import MainWindow

load_dotenv()

logger = logging.getLogger(__name__)

SESSION_FILE = os.getenv("SESSION_FILE", "~/.beer_reviews/session.json")

STYLESHEET = """
    QWidget {
        background-color: #F9FAFB;
        font-family: 'Segoe UI', sans-serif;
        font-size: 14px;
        color: #374151;
    }

    QLineEdit, QPlainTextEdit, QTextBrowser {
        background-color: #FFFFFF;
        border: 1px solid #D1D5DB;
        border-radius: 8px;
        padding: 6px;
    }

    QPushButton {
        background-color: #B45309;   /* amber */
        color: white;
        border-radius: 8px;
        padding: 6px 12px;
        font-weight: bold;
    }
    QPushButton:hover {
        background-color: #92400E;
    }

    QPushButton#logoutButton {
        background-color: #D1D5DB;
        color: #1F2937;
    }

    QLabel#errorLabel {
        color: #B91C1C;
        font-weight: bold;
    }
"""


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    app = QApplication(sys.argv)
    app.setStyleSheet(STYLESHEET)

    if not ping_server():
        logger.warning("Beer API at %s is not reachable; searches will fail until it is up", API_BASE_URL)

    controller = BeerReviewController(
        state=AppState(),
        page=Page.initial(),
        storage=LocalStorage(SESSION_FILE),
    )
    controller.load_session()

    window = MainWindow(controller)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
