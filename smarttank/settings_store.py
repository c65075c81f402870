"""
Persistent dashboard settings
Saves and restores user preferences across restarts as a keyed JSON blob
"""
import json
import logging
from pathlib import Path

from smarttank.config import SETTINGS_FILE, STORAGE_KEY, THEMES

log = logging.getLogger(__name__)

PERSISTED_FIELDS = ('isAuto', 'minLevel', 'maxLevel', 'theme')


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate(obj):
    """Keep only persisted fields whose values have the expected type"""
    settings = {}
    if isinstance(obj.get('isAuto'), bool):
        settings['isAuto'] = obj['isAuto']
    for key in ('minLevel', 'maxLevel'):
        if _is_number(obj.get(key)) and 0 <= obj[key] <= 100:
            settings[key] = obj[key]
    if obj.get('theme') in THEMES:
        settings['theme'] = obj['theme']
    return settings


class SettingsStore:
    """Manages persistent settings storage"""

    def __init__(self, settings_file=SETTINGS_FILE, key=STORAGE_KEY):
        self.settings_file = Path(settings_file)
        self.key = key

    def _read_blobs(self):
        """Load the whole key/value file from disk"""
        if not self.settings_file.exists():
            return {}
        with open(self.settings_file, 'r') as f:
            blobs = json.load(f)
        if not isinstance(blobs, dict):
            raise ValueError("settings file is not a JSON object")
        return blobs

    def load(self):
        """
        Return previously saved settings, or None if absent or corrupt.

        Only the fields that are present and well-typed are returned.
        """
        try:
            raw = self._read_blobs().get(self.key)
            if not raw:
                return None
            if not isinstance(raw, str):
                raise ValueError(f"stored value is {type(raw).__name__}, not a JSON string")
            obj = json.loads(raw)
            if not isinstance(obj, dict):
                return None
        except (OSError, ValueError) as e:
            log.debug("Ignoring unreadable settings in %s: %s", self.settings_file, e)
            return None

        return _validate(obj) or None

    def save(self, settings):
        """Persist the four settings fields; live values are never written"""
        blob = json.dumps({field: settings[field] for field in PERSISTED_FIELDS})
        try:
            try:
                blobs = self._read_blobs()
            except ValueError:
                blobs = {}
            blobs[self.key] = blob
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, 'w') as f:
                json.dump(blobs, f, indent=2)
        except OSError as e:
            log.warning("Could not save settings to %s: %s", self.settings_file, e)
