"""
Dashboard controller: owns the tank state, runs the control loop,
talks to Blynk and keeps the event log
"""
import itertools
import logging
import threading

from smarttank.blynk import GatewayError
from smarttank.config import (
    TICK_INTERVAL_MS, LEVEL_POLL_INTERVAL_MS, PAUSE_POLL_WHEN_HIDDEN, THEMES
)
from smarttank.control import HysteresisControl, band_is_valid, describe
from smarttank.event_log import EventLog
from smarttank.poll import PeriodicTask
from smarttank.render import render
from smarttank.state import TankState, clamp

log = logging.getLogger(__name__)

# Smallest min/max separation a user can set or load
THRESHOLD_GAP = 1


def dispatch_in_thread(func, *args):
    """Run func in a daemon thread and return immediately"""
    thread = threading.Thread(target=func, args=args, daemon=True)
    thread.start()
    return thread


class DashboardController:
    """Event handlers for the dashboard UI plus the two periodic timers"""

    def __init__(self, gateway, settings_store, event_log=None,
                 tick_interval=TICK_INTERVAL_MS / 1000,
                 poll_interval=LEVEL_POLL_INTERVAL_MS / 1000,
                 pause_poll_when_hidden=PAUSE_POLL_WHEN_HIDDEN,
                 dispatch=dispatch_in_thread):
        self.gateway = gateway
        self.settings_store = settings_store
        self.event_log = event_log if event_log is not None else EventLog()
        self.control = HysteresisControl()
        self.tick_interval = tick_interval
        self.poll_interval = poll_interval
        self.pause_poll_when_hidden = pause_poll_when_hidden
        self.dispatch = dispatch

        self._lock = threading.RLock()
        self._level_requests = itertools.count(1)
        self._last_level_request = 0
        self._tick_task = None
        self._poll_task = None
        self.view = None

        self.state = TankState()
        self._load_settings()
        self.render()

    # ==============================================================
    # Settings
    # ==============================================================
    def _load_settings(self):
        """Overlay persisted settings on the defaults"""
        settings = self.settings_store.load()
        if not settings:
            return

        # Stored band must keep the same gap set_threshold enforces
        min_level = settings.get('minLevel', self.state.min_level)
        max_level = settings.get('maxLevel', self.state.max_level)
        if not band_is_valid(min_level, max_level, gap=THRESHOLD_GAP):
            log.warning("Ignoring stored thresholds %s/%s, min must be at least %s below max",
                        min_level, max_level, THRESHOLD_GAP)
            settings.pop('minLevel', None)
            settings.pop('maxLevel', None)

        self.state.apply_settings(settings)

    def _save(self):
        self.settings_store.save(self.state.get_settings())

    # ==============================================================
    # Rendering
    # ==============================================================
    def render(self):
        """Recompute the view model from current state"""
        with self._lock:
            self.view = render(self.state)
            return self.view

    def snapshot(self):
        """Current view model plus event log, for the web layer"""
        with self._lock:
            view = dict(self.view)
            view['state'] = self.state.get_snapshot()
        view['log'] = [entry._asdict() for entry in self.event_log.entries()]
        return view

    # ==============================================================
    # UI handlers
    # ==============================================================
    def set_mode(self, auto):
        with self._lock:
            self.state.is_auto = bool(auto)
            self._save()
            mode_text = self.render()['mode_text']
        self.event_log.append(f"Mode changed to {mode_text}", 'mode')

    def toggle_motor_manual(self):
        """Flip the motor in MANUAL mode. Returns False if ignored (AUTO)."""
        with self._lock:
            if self.state.is_auto:
                return False
            self.state.motor_on = not self.state.motor_on
            motor_on = self.state.motor_on
            self.render()

        self.event_log.append(f"Motor {'started' if motor_on else 'stopped'} (manual)", 'motor')
        self.dispatch(self.push_motor_state, motor_on)
        return True

    def set_threshold(self, which, value):
        """
        Set the min or max threshold.

        The value is clamped to 0-100 and then kept on its own side of the
        other threshold so min stays below max. Returns the stored value.
        """
        if which not in ('min', 'max'):
            raise ValueError(f"Unknown threshold '{which}', must be 'min' or 'max'")
        if isinstance(value, bool):
            raise ValueError(f"Threshold must be a number, got {value!r}")
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Threshold must be a number, got {value!r}")
        if value != value:
            raise ValueError("Threshold must be a number, got NaN")
        if value.is_integer():
            value = int(value)

        with self._lock:
            value = clamp(value, 0, 100)
            if which == 'min':
                value = clamp(min(value, self.state.max_level - THRESHOLD_GAP), 0, 100)
                self.state.min_level = value
            else:
                value = clamp(max(value, self.state.min_level + THRESHOLD_GAP), 0, 100)
                self.state.max_level = value
            self._save()
            self.render()
            return value

    def set_theme(self, theme):
        if theme not in THEMES:
            raise ValueError(f"Unknown theme '{theme}', must be one of {', '.join(THEMES)}")
        with self._lock:
            self.state.theme = theme
            self._save()
            self.render()

    def toggle_theme(self):
        with self._lock:
            self.set_theme('dark' if self.state.theme == 'light' else 'light')
            return self.state.theme

    def reset_settings(self):
        with self._lock:
            self.state.reset_settings()
            self._save()
            self.render()
        self.event_log.append('Settings reset', 'info')

    def clear_log(self):
        self.event_log.clear()

    # ==============================================================
    # Control loop
    # ==============================================================
    def tick(self):
        """One control-loop pass followed by a re-render"""
        with self._lock:
            transition = self.control.step(self.state)
            motor_on = self.state.motor_on
            self.render()

        if transition:
            self.event_log.append(describe(transition), 'auto')
            self.dispatch(self.push_motor_state, motor_on)
        return transition

    # ==============================================================
    # Blynk
    # ==============================================================
    def refresh_level(self):
        """Fetch the tank level; on failure the previous value stays"""
        with self._lock:
            request_id = next(self._level_requests)
        try:
            level = self.gateway.read_level()
        except GatewayError as e:
            log.warning("Error fetching tank level from Blynk: %s", e)
            return False

        with self._lock:
            if request_id <= self._last_level_request:
                log.debug("Dropping stale tank level %s (request %d)", level, request_id)
                return False
            self._last_level_request = request_id
            self.state.level_percent = level
            self.render()
        log.info("Tank level fetched from Blynk: %s%%", level)
        return True

    def refresh_motor_state(self):
        """Fetch the motor state; on failure the local state stays"""
        try:
            motor_on = self.gateway.read_motor_state()
        except GatewayError as e:
            log.warning("Error fetching motor state from Blynk: %s", e)
            return False

        with self._lock:
            self.state.motor_on = motor_on
            self.render()
        message = f"Motor state fetched from Blynk: {'ON' if motor_on else 'OFF'}"
        log.info(message)
        self.event_log.append(message, 'blynk')
        return True

    def push_motor_state(self, motor_on):
        """Send the motor command. Local state is not rolled back on failure."""
        try:
            self.gateway.write_motor_state(motor_on)
        except GatewayError as e:
            log.warning("Error updating motor state on Blynk: %s", e)
            return False

        message = f"Motor state updated on Blynk: {'ON' if motor_on else 'OFF'}"
        log.info(message)
        self.event_log.append(message, 'blynk')
        return True

    # ==============================================================
    # Lifecycle
    # ==============================================================
    def start(self):
        """Fetch motor state once, then start the tick and level poll timers"""
        self.dispatch(self.refresh_motor_state)

        self._poll_task = PeriodicTask('level-poll', self.poll_interval, self.refresh_level)
        self._poll_task.start()
        self._start_tick()

        self.event_log.append('System initialized', 'info')

    def _start_tick(self):
        if self._tick_task and self._tick_task.running:
            return
        self._tick_task = PeriodicTask('tick', self.tick_interval, self.tick)
        self._tick_task.start()

    def _stop_tick(self):
        if self._tick_task:
            self._tick_task.stop()
            self._tick_task = None

    @property
    def ticking(self):
        return bool(self._tick_task and self._tick_task.running)

    def set_visible(self, visible):
        """Pause the tick while the dashboard is hidden, resume when shown"""
        if visible:
            self._start_tick()
            if self._poll_task:
                self._poll_task.resume()
        else:
            self._stop_tick()
            if self._poll_task and self.pause_poll_when_hidden:
                self._poll_task.pause()

    def stop(self):
        """Stop both timers; requests already in flight are left to finish"""
        self._stop_tick()
        if self._poll_task:
            self._poll_task.stop()
            self._poll_task = None
