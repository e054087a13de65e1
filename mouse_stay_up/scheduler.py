import logging
import random
import threading
from datetime import datetime
from typing import Callable, Optional

from .config import Config, RANDOM_INTERVAL, RANDOM_INTERVAL_RANGE
from .working_hours import is_movement_permitted

logger = logging.getLogger(__name__)


class MovementScheduler:
    """
    Periodic mover. Each start() begins a new run on a daemon thread; a run
    sleeps, re-reads the config, and moves the pointer if still enabled and
    inside working hours. Only the newest run may move: older runs notice
    they were superseded on their next wake and exit.
    """

    def __init__(
            self,
            config: Config,
            mover: Callable[[], bool],
            sleep: Optional[Callable[[float], object]] = None,
            now: Callable[[], datetime] = datetime.now,
            rng: Optional[random.Random] = None,
    ):
        self._config = config
        self._mover = mover
        self._shutdown = threading.Event()
        self._sleep = sleep or self._shutdown.wait
        self._now = now
        self._rng = rng or random.Random()
        self._lock = threading.Lock()
        self._generation = 0
        self.moves = 0

    @property
    def generation(self) -> int:
        return self._generation

    def start(self) -> int:
        with self._lock:
            self._generation += 1
            generation = self._generation
        thread = threading.Thread(
            target=self.run, args=(generation,), name=f"mover-{generation}", daemon=True
        )
        thread.start()
        logger.debug("Mover run %s started", generation)
        return generation

    def shutdown(self):
        """Wakes sleeping runs and makes every run exit."""
        self._shutdown.set()

    def next_wait(self, interval: int) -> float:
        if interval == RANDOM_INTERVAL:
            return self._rng.randint(*RANDOM_INTERVAL_RANGE)
        return interval

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def run(self, generation: int):
        while not self._shutdown.is_set():
            wait = self.next_wait(self._config.snapshot().sleep_interval)
            self._sleep(wait)

            snapshot = self._config.snapshot()
            if self._shutdown.is_set() or not snapshot.enabled:
                break
            if not self._is_current(generation):
                logger.debug("Mover run %s superseded", generation)
                break
            if not is_movement_permitted(snapshot.working_hours_interval, self._now()):
                logger.debug("Outside working hours (%s), skipping tick",
                             snapshot.working_hours_interval)
                continue
            self._tick()
        logger.debug("Mover run %s stopped", generation)

    def _tick(self):
        try:
            moved = self._mover()
        except Exception as exc:
            logger.warning("Mouse movement raised: %s", exc)
            return
        if moved:
            self.moves += 1
