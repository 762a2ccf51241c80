import logging
import signal

log = logging.getLogger(__name__)


class CtrlCHandler:
    """
    Handle Ctrl+C so sensor sources are stopped and the telemetry
    session is flushed before the process exits.
    """
    def __init__(self, install: bool = True):
        self.should_stop = False
        self.interrupts = 0
        self._previous_handler = None
        if install:
            self._previous_handler = signal.signal(signal.SIGINT, self._signal_handler)

    def _signal_handler(self, sig, frame):
        """Callback executed when Ctrl+C is detected"""
        self.interrupts += 1
        if self.interrupts > 1:
            # Second Ctrl+C while shutting down: give up on the clean path
            raise KeyboardInterrupt
        log.info("[CTRL] Interrupt signal detected, closing cleanly...")
        self.should_stop = True

    def restore(self):
        """Reinstall the SIGINT handler that was active before."""
        if self._previous_handler is not None:
            signal.signal(signal.SIGINT, self._previous_handler)
            self._previous_handler = None
