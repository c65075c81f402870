"""
Periodic background timers for the control tick and the level poll
"""
import logging
import threading

log = logging.getLogger(__name__)


class PeriodicTask(threading.Thread):
    """Thread that calls a function every interval seconds until stopped"""

    def __init__(self, name, interval, func, run_immediately=False):
        super().__init__(name=name, daemon=True)
        self.interval = interval
        self.func = func
        self.run_immediately = run_immediately
        self._stop_event = threading.Event()
        self._active = threading.Event()
        self._active.set()

    @property
    def running(self):
        return self.is_alive() and not self._stop_event.is_set()

    @property
    def paused(self):
        return not self._active.is_set()

    def stop(self):
        """Stop the timer. A call already in progress is allowed to finish."""
        self._stop_event.set()
        self._active.set()

    def pause(self):
        self._active.clear()

    def resume(self):
        self._active.set()

    def _fire(self):
        try:
            self.func()
        except Exception:
            # Keep the timer alive; the next period is the only recovery
            log.exception("%s callback failed", self.name)

    def run(self):
        """Call func on every period while active"""
        if self.run_immediately:
            self._fire()

        while not self._stop_event.wait(self.interval):
            self._active.wait()
            if self._stop_event.is_set():
                break
            self._fire()
