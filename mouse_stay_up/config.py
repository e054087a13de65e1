import logging
import os
import platform
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any

from .working_hours import ALWAYS, is_valid_label

DEV_MODE = 'dev' in sys.argv

RANDOM_INTERVAL = -1  # sentinel: pick a fresh random wait on every tick
RANDOM_INTERVAL_RANGE = (10, 60)  # s
ALLOWED_INTERVALS = (RANDOM_INTERVAL, 30, 60)

WORKING_HOURS = (
    ALWAYS,
    "08:00-17:00",
    "09:00-17:00",
    "09:00-18:00",
    "10:00-19:00",
    "22:00-06:00",
)

GIT_REPO = "https://github.com/sonjek/mouse-stay-up"
ICON_ENV = "MOUSE_STAY_UP_ICON"

DEFAULTS: Dict[str, Any] = {
    "enabled": True,
    "sleep_interval": RANDOM_INTERVAL,
    "working_hours": WORKING_HOURS,
    "working_hours_interval": ALWAYS,
    "git_repo": GIT_REPO,
}

logging.basicConfig(
    level=logging.DEBUG if DEV_MODE else logging.INFO,
    format='%(asctime)s: %(message)s',
    datefmt='%H:%M:%S'
)
logging.getLogger("PIL").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def config_dir() -> Path:
    return Path(os.environ.get(
        "APPDATA",
        Path.home() / ("AppData/Roaming" if platform.system() == "Windows" else ".config"))
    ) / f"mouse_stay_up{'_dev' if DEV_MODE else ''}"


class InvalidSettingError(ValueError):
    """A setter was given a value outside its allowed set."""


@dataclass(frozen=True)
class ConfigSnapshot:
    enabled: bool
    sleep_interval: int
    working_hours_interval: str


class Config:
    """Operational settings shared by the coordinator and the scheduler.

    Only the coordinator thread mutates a Config; the scheduler reads it
    through :meth:`snapshot`, which never returns a half-applied update.
    """

    def __init__(self, values: Dict[str, Any] | None = None):
        self._lock = threading.Lock()
        self.enabled: bool = DEFAULTS["enabled"]
        self.sleep_interval: int = DEFAULTS["sleep_interval"]
        self.working_hours: tuple[str, ...] = tuple(DEFAULTS["working_hours"])
        self.working_hours_interval: str = DEFAULTS["working_hours_interval"]
        self.git_repo: str = DEFAULTS["git_repo"]
        if values:
            self.update(values)

    def set_enabled(self, enabled: bool) -> None:
        with self._lock:
            self.enabled = bool(enabled)

    def set_sleep_interval(self, value: int) -> None:
        if isinstance(value, bool) or value not in ALLOWED_INTERVALS:
            raise InvalidSettingError(f"Unsupported sleep interval: {value!r}")
        with self._lock:
            self.sleep_interval = int(value)

    def set_working_hours_interval(self, label: str) -> None:
        if label not in self.working_hours:
            raise InvalidSettingError(f"Unknown working hours interval: {label!r}")
        with self._lock:
            self.working_hours_interval = label

    def snapshot(self) -> ConfigSnapshot:
        with self._lock:
            return ConfigSnapshot(
                enabled=self.enabled,
                sleep_interval=self.sleep_interval,
                working_hours_interval=self.working_hours_interval,
            )

    def update(self, values: Dict[str, Any]) -> None:
        """Applies startup values; unknown keys are ignored, invalid ones keep the default."""
        if not isinstance(values, dict):
            return
        # the catalog has to be in place before a selection from it is validated
        if "working_hours" in values:
            self._set_catalog(values["working_hours"])

        for key, value in values.items():
            try:
                if key == "enabled":
                    self.set_enabled(value)
                elif key == "sleep_interval":
                    self.set_sleep_interval(value)
                elif key == "working_hours_interval":
                    self.set_working_hours_interval(value)
                elif key == "git_repo" and isinstance(value, str):
                    self.git_repo = value
            except InvalidSettingError as exc:
                logger.warning("Ignoring setting %s: %s", key, exc)

    def _set_catalog(self, catalog) -> None:
        if not isinstance(catalog, (list, tuple)):
            logger.warning("Ignoring setting working_hours: expected a list, got %r", catalog)
            return

        labels = []
        for label in catalog:
            if not isinstance(label, str) or not is_valid_label(label):
                logger.warning("Ignoring working hours label %r", label)
            elif label not in labels:
                labels.append(label)
        if ALWAYS not in labels:
            labels.insert(0, ALWAYS)

        self.working_hours = tuple(labels)
        if self.working_hours_interval not in self.working_hours:
            self.working_hours_interval = ALWAYS
