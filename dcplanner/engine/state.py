# engine/state.py
from typing import Dict

from .storage import load_settings, save_settings


class SettingsState:
    """Named user-input records persisted as one JSON file."""

    def __init__(self, storage_path: str = "user_data/settings.json"):
        self.storage_path = storage_path
        self.settings: Dict[str, dict] = load_settings(storage_path)

    def list_names(self):
        return sorted(self.settings.keys())

    def get(self, name: str) -> dict | None:
        return self.settings.get(name)

    def save(self, name: str, payload: dict) -> None:
        self.settings[name] = payload
        self._save()

    def delete(self, name: str) -> None:
        if name in self.settings:
            del self.settings[name]
            self._save()

    def clear(self) -> None:
        self.settings = {}
        self._save()

    def _save(self) -> None:
        save_settings(self.storage_path, self.settings)
