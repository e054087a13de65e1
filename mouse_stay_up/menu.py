import logging
from typing import Callable, Dict, Hashable, Iterable, Optional

logger = logging.getLogger(__name__)

ENABLE = "enable"
DISABLE = "disable"
INTERVAL = "interval"
WORKING_HOURS = "working_hours"
ABOUT = "about"
QUIT = "quit"

ITEMS = (ENABLE, DISABLE, INTERVAL, WORKING_HOURS, ABOUT, QUIT)


class ExclusiveChoice:
    """An ordered group of options with exactly one of them checked."""

    def __init__(self, options: Iterable[Hashable], selected: Hashable):
        self.options = tuple(options)
        if selected not in self.options:
            raise KeyError(selected)
        self.selected = selected

    def select(self, key: Hashable) -> None:
        if key not in self.options:
            raise KeyError(key)
        self.selected = key

    def is_checked(self, key: Hashable) -> bool:
        return key == self.selected

    def checked(self) -> list:
        return [option for option in self.options if option == self.selected]


class MenuState:
    """
    What the tray menu should look like. The coordinator issues show/hide/
    enable/disable/select commands here; the tray reads it when drawing.
    """

    def __init__(
            self,
            intervals: ExclusiveChoice,
            hours: ExclusiveChoice,
            refresh: Optional[Callable[[], None]] = None,
    ):
        self.intervals = intervals
        self.hours = hours
        self.visible: Dict[str, bool] = {name: True for name in ITEMS}
        self.enabled: Dict[str, bool] = {name: True for name in ITEMS}
        self.refresh = refresh

    def show(self, name: str):
        self.visible[name] = True

    def hide(self, name: str):
        self.visible[name] = False

    def enable(self, name: str):
        self.enabled[name] = True

    def disable(self, name: str):
        self.enabled[name] = False

    def is_visible(self, name: str) -> bool:
        return self.visible[name]

    def is_enabled(self, name: str) -> bool:
        return self.enabled[name]

    def redraw(self):
        if self.refresh is None:
            return
        try:
            self.refresh()
        except Exception as e:
            logger.debug("Menu refresh failed: %s", e)
