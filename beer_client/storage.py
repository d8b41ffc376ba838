import json
import logging
import os

logger = logging.getLogger(__name__)

LOGIN_HASH_KEY = "loginHash"
USER_ID_KEY = "userId"


class LocalStorage:
    """Small persistent key/value store backed by a JSON file.

    Holds the Base64 ``username:password`` login hash between runs. That hash
    is a reusable credential kept in plain text on disk.
    """

    def __init__(self, path):
        self.path = os.path.expanduser(path)

    def _load(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read session file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)

    def get_item(self, key):
        return self._load().get(key)

    def set_item(self, key, value):
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key):
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
