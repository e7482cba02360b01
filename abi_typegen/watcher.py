"""
Re-generation on ABI file changes.

The watcher polls the file's modification time on a background thread and
feeds changes into a debouncer, so a burst of writes within the debounce
window triggers a single regeneration.
"""

import os
import threading
from typing import Callable, Optional, Tuple


class SingleShotLatch:
    """A latch that can be tripped exactly once."""

    def __init__(self):
        self._lock = threading.Lock()
        self._tripped = False

    @property
    def tripped(self) -> bool:
        return self._tripped

    def trip(self) -> bool:
        """Trip the latch. Returns True only for the first caller."""
        with self._lock:
            if self._tripped:
                return False
            self._tripped = True
            return True


class Debouncer:
    """Runs `action` once `delay` seconds have passed without a new trigger.

    At most one action runs at a time. A trigger that fires while the action
    is still running is folded into a single rerun after it finishes.
    """

    def __init__(self, delay: float, action: Callable[[], None]):
        self.delay = delay
        self._action = action
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._running = False
        self._rerun = False

    def trigger(self) -> None:
        """Schedule the action, restarting the window if one is pending."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
            if self._running:
                self._rerun = True
                return
            self._running = True

        try:
            while True:
                self._action()
                with self._lock:
                    if not self._rerun:
                        self._running = False
                        return
                    self._rerun = False
        except BaseException:
            with self._lock:
                self._running = False
                self._rerun = False
            raise

    @property
    def pending(self) -> bool:
        return self._timer is not None or self._rerun

    @property
    def running(self) -> bool:
        return self._running

    def cancel(self) -> None:
        with self._lock:
            self._rerun = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


class AbiFileWatcher:
    """Polls a file and calls `on_change` (debounced) whenever it changes."""

    def __init__(
        self,
        path: str,
        on_change: Callable[[], None],
        debounce: float = 0.1,
        poll_interval: float = 0.25,
    ):
        self.path = path
        self.poll_interval = poll_interval
        self._debouncer = Debouncer(debounce, on_change)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._signature = self._stat()

    def _stat(self) -> Optional[Tuple[float, int]]:
        try:
            st = os.stat(self.path)
        except FileNotFoundError:
            return None
        return st.st_mtime, st.st_size

    def check(self) -> bool:
        """Compare the file against the last seen state; trigger on change."""
        signature = self._stat()
        if signature is None or signature == self._signature:
            return False
        self._signature = signature
        self._debouncer.trigger()
        return True

    def _run(self) -> None:
        while not self._stop.wait(self.poll_interval):
            self.check()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run, name=f'abi-watch:{self.path}', daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        self._debouncer.cancel()
        if self._thread is not None:
            self._thread.join(timeout=self.poll_interval * 4)
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
