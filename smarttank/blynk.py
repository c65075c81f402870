"""
Blynk cloud client for tank level and motor state
Thin wrapper over the Blynk HTTP external API
"""
import math

import requests

from smarttank.config import BLYNK_API_URL, LEVEL_PIN, MOTOR_PIN, REQUEST_TIMEOUT
from smarttank.state import clamp


class GatewayError(Exception):
    """A Blynk request failed or could not be used"""


class MalformedResponse(GatewayError):
    """Blynk answered, but not with the payload shape we expect"""


def _first_element(payload):
    if not isinstance(payload, list) or not payload:
        raise MalformedResponse(f"expected a non-empty JSON array, got {payload!r}")
    return payload[0]


def parse_level(payload):
    """
    Parse a level response like ["42.5"] into a percentage.
    Values outside 0-100 are clamped.
    """
    raw = _first_element(payload)
    if isinstance(raw, bool):
        raise MalformedResponse(f"level is not numeric: {raw!r}")
    try:
        level = float(raw)
    except (TypeError, ValueError):
        raise MalformedResponse(f"level is not numeric: {raw!r}")
    if not math.isfinite(level):
        raise MalformedResponse(f"level is not finite: {raw!r}")
    return clamp(level, 0.0, 100.0)


def parse_motor_state(payload):
    """Parse a motor response like ["1"] into True/False"""
    raw = str(_first_element(payload)).strip()
    if raw == '1':
        return True
    if raw == '0':
        return False
    raise MalformedResponse(f"motor state is not 0 or 1: {raw!r}")


class BlynkGateway:
    """Reads the tank sensor and motor actuator, writes motor commands"""

    def __init__(self, token, api_url=BLYNK_API_URL, timeout=REQUEST_TIMEOUT,
                 level_pin=LEVEL_PIN, motor_pin=MOTOR_PIN):
        self.token = token
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout
        self.level_pin = level_pin
        self.motor_pin = motor_pin

    def _get(self, url):
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response
        except requests.Timeout:
            raise GatewayError(f"Timeout after {self.timeout}s")
        except requests.ConnectionError as e:
            raise GatewayError(f"Connection error: {e}")
        except requests.HTTPError as e:
            raise GatewayError(f"HTTP {e.response.status_code}: {e}")
        except requests.RequestException as e:
            raise GatewayError(f"Request failed: {e}")

    def _get_json(self, url):
        response = self._get(url)
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(f"response is not JSON: {e}")

    def read_level(self):
        """Fetch the tank level percentage"""
        payload = self._get_json(f"{self.api_url}/get?token={self.token}&{self.level_pin}")
        return parse_level(payload)

    def read_motor_state(self):
        """Fetch the motor state as a bool"""
        payload = self._get_json(f"{self.api_url}/get?token={self.token}&{self.motor_pin}")
        return parse_motor_state(payload)

    def write_motor_state(self, on):
        """Command the motor ON or OFF"""
        value = 1 if on else 0
        self._get(f"{self.api_url}/update?token={self.token}&{self.motor_pin}={value}")
        return True
