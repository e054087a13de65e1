"""
Single consumer of tray events. Owns the Config: every mutation happens here,
one event at a time, in the order the events were posted.
"""

import logging
import queue
import webbrowser
from typing import Callable, Optional

from .config import Config, InvalidSettingError
from .events import About, Disable, Enable, Event, HoursChanged, IntervalChanged, Quit
from .menu import DISABLE, ENABLE, INTERVAL, WORKING_HOURS, MenuState
from .scheduler import MovementScheduler

logger = logging.getLogger(__name__)


class EventCoordinator:
    def __init__(
            self,
            config: Config,
            scheduler: MovementScheduler,
            menu: MenuState,
            open_url: Callable[[str], object] = webbrowser.open,
            on_quit: Optional[Callable[[], None]] = None,
    ):
        self.config = config
        self.scheduler = scheduler
        self.menu = menu
        self._open_url = open_url
        self._on_quit = on_quit
        self.events: "queue.Queue[Event]" = queue.Queue()
        self._handlers = {
            Enable: self._on_enable,
            Disable: self._on_disable,
            IntervalChanged: self._on_interval,
            HoursChanged: self._on_hours,
            About: self._on_about,
            Quit: self._on_quit_event,
        }

    def post(self, event: Event):
        self.events.put(event)

    def start(self):
        """Brings the menu in line with the config and starts moving if enabled."""
        self._sync_menu()
        if self.config.enabled:
            self.scheduler.start()
        logger.info("Mouse movement %s", "enabled" if self.config.enabled else "disabled")

    def run(self):
        while True:
            event = self.events.get()
            try:
                if not self.handle(event):
                    break
            finally:
                self.events.task_done()
        logger.debug("Event loop finished")

    def handle(self, event: Event) -> bool:
        """Processes one event. Returns False once the loop should stop."""
        handler = self._handlers.get(type(event))
        if handler is None:
            logger.warning("Unknown event: %r", event)
            return True
        try:
            return handler(event) is not False
        except InvalidSettingError as exc:
            logger.warning("Rejected %r: %s", event, exc)
        except Exception:
            logger.exception("Failed to handle %r", event)
        try:
            self._sync_menu()
        except Exception:
            logger.exception("Failed to resync menu after %r", event)
        return True

    def _on_enable(self, event: Enable):
        if self.config.enabled:
            logger.debug("Already enabled")
            return
        self.config.set_enabled(True)
        self._sync_menu()
        self.scheduler.start()
        logger.info("Mouse movement enabled")

    def _on_disable(self, event: Disable):
        if not self.config.enabled:
            logger.debug("Already disabled")
            return
        self.config.set_enabled(False)
        self._sync_menu()
        logger.info("Mouse movement disabled")

    def _on_interval(self, event: IntervalChanged):
        self.config.set_sleep_interval(event.value)
        self._sync_menu()
        logger.debug("Sleep interval set to %s", event.value)

    def _on_hours(self, event: HoursChanged):
        self.config.set_working_hours_interval(event.label)
        self._sync_menu()
        logger.debug("Working hours set to %s", event.label)

    def _on_about(self, event: About):
        self._open_url(self.config.git_repo)

    def _on_quit_event(self, event: Quit):
        logger.info("Quitting")
        self.scheduler.shutdown()
        if self._on_quit:
            # the scheduler is already shut down, so the loop ends even if the tray cannot stop
            try:
                self._on_quit()
            except Exception:
                logger.exception("Failed to stop the tray")
        return False

    def _sync_menu(self):
        """Recomputes the whole menu view from the config."""
        enabled = self.config.enabled
        menu = self.menu
        if enabled:
            menu.hide(ENABLE)
            menu.show(DISABLE)
            menu.enable(INTERVAL)
            menu.enable(WORKING_HOURS)
        else:
            menu.hide(DISABLE)
            menu.show(ENABLE)
            menu.disable(INTERVAL)
            menu.disable(WORKING_HOURS)
        menu.intervals.select(self.config.sleep_interval)
        menu.hours.select(self.config.working_hours_interval)
        menu.redraw()
