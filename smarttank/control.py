"""
Automatic motor control with hysteresis

The motor turns ON when the tank drops to min_level and stays ON until the
tank reaches max_level. Between the two thresholds nothing changes, so the
pump does not chatter around a single setpoint.
"""
import logging
from collections import namedtuple

log = logging.getLogger(__name__)

MOTOR_OFF = 'MOTOR_OFF'
MOTOR_ON = 'MOTOR_ON'

Transition = namedtuple('Transition', ['source', 'target', 'level'])


def band_is_valid(min_level, max_level, gap=0):
    """True when max_level sits above min_level by more than zero, or by at least gap"""
    if gap:
        return max_level - min_level >= gap
    return min_level < max_level


class HysteresisControl:
    """Two-state motor controller evaluated once per tick"""

    def __init__(self):
        self._band_warned = False

    def step(self, state):
        """
        Apply one control tick to state.

        Returns the Transition taken, or None when the loop is inert
        (manual mode, unknown level, invalid band) or the level sits in the
        dead band.
        """
        if not state.is_auto or state.level_percent is None:
            return None

        if not band_is_valid(state.min_level, state.max_level):
            if not self._band_warned:
                log.warning("Hysteresis band invalid (min %s%% >= max %s%%), auto control suspended",
                            state.min_level, state.max_level)
                self._band_warned = True
            return None
        self._band_warned = False

        level = state.level_percent
        if not state.motor_on and level <= state.min_level:
            state.motor_on = True
            return Transition(MOTOR_OFF, MOTOR_ON, level)
        if state.motor_on and level >= state.max_level:
            state.motor_on = False
            return Transition(MOTOR_ON, MOTOR_OFF, level)
        return None


def describe(transition):
    """Event log text for a transition, e.g. 'Auto ON at 25%'"""
    word = 'ON' if transition.target == MOTOR_ON else 'OFF'
    return f"Auto {word} at {transition.level:.0f}%"
