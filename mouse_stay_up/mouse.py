import logging
import math
import time

logger = logging.getLogger(__name__)

CIRCLE_RADIUS = 3  # px
CIRCLE_STEPS = 8
STEP_DELAY = 0.01  # s


class MouseController:
    """Nudges the pointer around a tiny circle and brings it back."""

    def __init__(self, gui=None, radius: int = CIRCLE_RADIUS, steps: int = CIRCLE_STEPS):
        if gui is None:
            import pyautogui as gui
            gui.FAILSAFE = False
        self._gui = gui
        self.radius = radius
        self.steps = steps
        self._move_error_logged = False

    def move(self) -> bool:
        """Returns True if the pointer was moved; failures are logged, never raised."""
        try:
            start = tuple(self._gui.position())
            for x, y in self._circle(start):
                self._gui.moveTo(x, y)
                time.sleep(STEP_DELAY)
            self._gui.moveTo(*start)
        except Exception as exc:
            self._log_move_error("Mouse movement failed", exc)
            return False

        if self._move_error_logged:
            logger.info("Mouse movement recovered after previous failure.")
            self._move_error_logged = False
        logger.debug("Mouse moved around %s", start)
        return True

    def _circle(self, center: tuple[int, int]):
        cx, cy = center
        for step in range(1, self.steps + 1):
            angle = 2 * math.pi * step / self.steps
            yield (round(cx + self.radius * math.cos(angle)),
                   round(cy + self.radius * math.sin(angle)))

    def _log_move_error(self, message: str, exc: Exception):
        """Emits a warning only once per failure burst so logs stay readable."""
        if not self._move_error_logged:
            logger.warning("%s: %s", message, exc)
            self._move_error_logged = True
        else:
            logger.debug("%s: %s", message, exc)
