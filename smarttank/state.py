"""
Shared tank state for the dashboard
"""
from smarttank.config import (
    DEFAULT_IS_AUTO, DEFAULT_MIN_LEVEL, DEFAULT_MAX_LEVEL, DEFAULT_THEME
)

def clamp(value, lo, hi):
    return lo if value < lo else hi if value > hi else value

def default_settings():
    """The persisted fields with their factory values"""
    return {
        'isAuto': DEFAULT_IS_AUTO,
        'minLevel': DEFAULT_MIN_LEVEL,
        'maxLevel': DEFAULT_MAX_LEVEL,
        'theme': DEFAULT_THEME,
    }

class TankState:
    """Track current tank, motor and preference state"""

    def __init__(self):
        self.level_percent = None  # Unknown until the first Blynk read
        self.motor_on = False
        self.is_auto = DEFAULT_IS_AUTO
        self.min_level = DEFAULT_MIN_LEVEL
        self.max_level = DEFAULT_MAX_LEVEL
        self.theme = DEFAULT_THEME

    def apply_settings(self, settings):
        """Overlay persisted settings; keys that are absent keep their value"""
        if 'isAuto' in settings:
            self.is_auto = settings['isAuto']
        if 'minLevel' in settings:
            self.min_level = settings['minLevel']
        if 'maxLevel' in settings:
            self.max_level = settings['maxLevel']
        if 'theme' in settings:
            self.theme = settings['theme']

    def reset_settings(self):
        """Restore default preferences. Level and motor are live values and stay."""
        self.apply_settings(default_settings())

    def get_settings(self):
        """Persistable subset of the state"""
        return {
            'isAuto': self.is_auto,
            'minLevel': self.min_level,
            'maxLevel': self.max_level,
            'theme': self.theme,
        }

    def get_snapshot(self):
        """Get current state snapshot"""
        snapshot = self.get_settings()
        snapshot['levelPercent'] = self.level_percent
        snapshot['motorOn'] = self.motor_on
        return snapshot
