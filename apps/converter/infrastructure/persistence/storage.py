"""
Theme preference storage.
Abstracts where the "theme" key lives so the domain never touches a backend.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from apps.converter.domain.interfaces import BaseThemeStorage

logger = logging.getLogger(__name__)


class SessionThemeStorage(BaseThemeStorage):
    """Preference kept in the Django session of the current visitor."""

    def __init__(self, session):
        self.session = session

    def load(self) -> Optional[str]:
        return self.session.get(self.KEY)

    def save(self, value: str) -> None:
        self.session[self.KEY] = value


class FileThemeStorage(BaseThemeStorage):
    """Preference kept in a small JSON file, used by the management commands."""

    def __init__(self, path):
        self.path = Path(path).expanduser()

    def load(self) -> Optional[str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Unreadable theme file %s: %s", self.path, e)
            return None

        value = data.get(self.KEY) if isinstance(data, dict) else None
        return value if isinstance(value, str) else None

    def save(self, value: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({self.KEY: value}), encoding="utf-8")


class InMemoryThemeStorage(BaseThemeStorage):

    def __init__(self, value: Optional[str] = None):
        self.value = value

    def load(self) -> Optional[str]:
        return self.value

    def save(self, value: str) -> None:
        self.value = value
