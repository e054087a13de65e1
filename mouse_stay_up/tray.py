import logging
import threading

import pystray
from pystray import MenuItem as item, Menu

from .config import ALLOWED_INTERVALS, Config
from .coordinator import EventCoordinator
from .events import About, Disable, Enable, HoursChanged, IntervalChanged, Quit
from .localization import Translator, detect_system_language
from .menu import ABOUT, DISABLE, ENABLE, INTERVAL, QUIT, WORKING_HOURS, ExclusiveChoice, MenuState
from .mouse import MouseController
from .scheduler import MovementScheduler
from .utils import format_interval, load_tray_image, open_web_page

logger = logging.getLogger(__name__)


class TrayApp:
    def __init__(self, config: Config | None = None, image=None):
        self.config = config or Config()
        self.translator = Translator(detect_system_language())
        self.image = image if image is not None else load_tray_image()
        self.icon: pystray.Icon | None = None

        self.menu_state = MenuState(
            intervals=ExclusiveChoice(ALLOWED_INTERVALS, self.config.sleep_interval),
            hours=ExclusiveChoice(self.config.working_hours, self.config.working_hours_interval),
            refresh=self._update_menu,
        )
        self.scheduler = MovementScheduler(self.config, MouseController().move)
        self.coordinator = EventCoordinator(
            self.config,
            self.scheduler,
            self.menu_state,
            open_url=open_web_page,
            on_quit=self._stop_icon,
        )
        self._coordinator_thread = threading.Thread(
            target=self.coordinator.run, name="coordinator", daemon=True
        )
        self._setup_tray()

    def _setup_tray(self):
        t = self.translator.translate
        state = self.menu_state

        interval_items = [
            item(format_interval(seconds, self.translator),
                 self._post_action(IntervalChanged(seconds)),
                 checked=self._checked(state.intervals, seconds),
                 radio=True)
            for seconds in state.intervals.options
        ]
        hours_items = [
            item(label,
                 self._post_action(HoursChanged(label)),
                 checked=self._checked(state.hours, label),
                 radio=True)
            for label in state.hours.options
        ]

        menu = Menu(
            self._menu_item(t("tray.enable"), ENABLE, self._post_action(Enable())),
            self._menu_item(t("tray.disable"), DISABLE, self._post_action(Disable())),
            self._menu_item(t("tray.interval"), INTERVAL, Menu(*interval_items)),
            self._menu_item(t("tray.working_hours"), WORKING_HOURS, Menu(*hours_items)),
            Menu.SEPARATOR,
            self._menu_item(t("tray.about"), ABOUT, self._post_action(About())),
            self._menu_item(t("tray.quit"), QUIT, self._post_action(Quit())),
        )
        self.icon = pystray.Icon("MouseStayUp", self.image, t("tray.tooltip"), menu)

    def _menu_item(self, text, name, action):
        state = self.menu_state
        return item(text, action,
                    visible=lambda _: state.is_visible(name),
                    enabled=lambda _: state.is_enabled(name))

    @staticmethod
    def _checked(choice: ExclusiveChoice, key):
        return lambda _: choice.is_checked(key)

    def _post_action(self, event):
        def _action(icon, menu_item):
            self.coordinator.post(event)

        return _action

    def _update_menu(self):
        if self.icon is not None:
            self.icon.update_menu()

    def _on_ready(self, icon: pystray.Icon):
        icon.visible = True
        self.coordinator.start()
        self._coordinator_thread.start()
        logger.debug("Tray ready")

    def _stop_icon(self):
        if self.icon is not None:
            self.icon.stop()

    def run(self):
        self.icon.run(setup=self._on_ready)
