"""
Configuration constants for the smart tank dashboard
"""
import os
from pathlib import Path

# Blynk virtual pins
MOTOR_PIN = 'v1'  # Motor state, 0 = OFF, 1 = ON
LEVEL_PIN = 'v2'  # Tank level percentage, 0-100

# Blynk HTTP API
BLYNK_API_URL = "https://blynk.cloud/external/api"
REQUEST_TIMEOUT = 10  # Seconds before a Blynk request is abandoned

# Timer Intervals
TICK_INTERVAL_MS = 800  # Control loop and re-render
LEVEL_POLL_INTERVAL_MS = 5000  # Tank level fetch from Blynk
PAUSE_POLL_WHEN_HIDDEN = False  # Level poll keeps running while the dashboard is hidden

# Default Settings
DEFAULT_IS_AUTO = True
DEFAULT_MIN_LEVEL = 30  # Percent at or below which AUTO turns the motor ON
DEFAULT_MAX_LEVEL = 85  # Percent at or above which AUTO turns the motor OFF
DEFAULT_THEME = 'dark'
THEMES = ('light', 'dark')

# Settings persistence
STORAGE_KEY = 'smart-tank-settings-v1'
SETTINGS_FILE = Path.home() / '.config' / 'smarttank' / 'settings.json'

# Web Dashboard Configuration
WEB_HOST = '0.0.0.0'
WEB_PORT = 8080

# Config file path (optional)
CONFIG_FILE = Path.home() / '.config' / 'smarttank' / 'monitor.conf'
SECRETS_FILE = Path.home() / '.config' / 'smarttank' / 'secrets.conf'

# Keys whose values stay strings even when they look numeric
STRING_KEYS = ('BLYNK_AUTH_TOKEN', 'BLYNK_API_URL', 'SETTINGS_FILE', 'LOG_FILE', 'WEB_HOST')

def load_config_file(path=None):
    """
    Load configuration from file if it exists.
    Returns dict of config values or empty dict if file doesn't exist.
    """
    config_file = Path(path) if path else CONFIG_FILE
    if not config_file.exists():
        return {}

    config = {}
    try:
        with open(config_file, 'r') as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue

                if '=' in line:
                    key, value = line.split('=', 1)
                    key = key.strip()
                    value = value.strip()

                    # Convert to appropriate type
                    if key in STRING_KEYS:
                        config[key] = value
                    elif value.lower() in ('true', 'false'):
                        config[key] = value.lower() == 'true'
                    elif value.isdigit():
                        config[key] = int(value)
                    else:
                        try:
                            config[key] = float(value)
                        except ValueError:
                            config[key] = value

        return config
    except OSError as e:
        print(f"Warning: Could not load config file {config_file}: {e}")
        return {}

def load_secrets(path=None):
    """
    Read KEY=value pairs from the secrets file.
    Returns an empty dict if the file is missing or unreadable.
    """
    secrets_file = Path(path) if path else SECRETS_FILE
    secrets = {}
    if not secrets_file.exists():
        return secrets
    try:
        with open(secrets_file, 'r') as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#') or '=' not in line:
                    continue
                key, value = line.split('=', 1)
                secrets[key.strip()] = value.strip()
    except OSError as e:
        print(f"Warning: Could not load secrets file {secrets_file}: {e}")
    return secrets

def resolve_auth_token(secrets=None):
    """Blynk token: environment wins over the secrets file"""
    env_token = os.environ.get('SMARTTANK_BLYNK_TOKEN')
    if env_token:
        return env_token
    if secrets is None:
        secrets = load_secrets()
    return secrets.get('BLYNK_AUTH_TOKEN', '')

# Loaded from secrets file or SMARTTANK_BLYNK_TOKEN
BLYNK_AUTH_TOKEN = resolve_auth_token()
