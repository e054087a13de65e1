import logging
import os
import webbrowser
from pathlib import Path

from PIL import Image, ImageDraw

from .config import ICON_ENV, RANDOM_INTERVAL, RANDOM_INTERVAL_RANGE
from .localization import Translator

logger = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """The application cannot start (e.g. its tray icon is unusable)."""


def format_interval(seconds: int, translator: Translator | None = None) -> str:
    translator = translator or Translator()
    if seconds == RANDOM_INTERVAL:
        low, high = RANDOM_INTERVAL_RANGE
        return translator.translate("interval.random", low=low, high=high)
    return translator.translate("interval.fixed", seconds=seconds)


def create_tray_image():
    """Draws a small mouse silhouette."""
    width = height = 64
    img = Image.new('RGBA', (width, height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.rounded_rectangle((16, 6, width - 16, height - 6), radius=20, fill="black")
    draw.line((width // 2, 8, width // 2, 26), fill="white", width=3)
    draw.line((18, 26, width - 18, 26), fill="white", width=2)
    return img


def load_tray_image(path: str | os.PathLike | None = None):
    """Loads the tray image from `path` (or $MOUSE_STAY_UP_ICON); draws the default without one."""
    path = path or os.environ.get(ICON_ENV)
    if not path:
        return create_tray_image()
    try:
        with Image.open(Path(path)) as img:
            img.load()
            return img.copy()
    except OSError as exc:
        raise StartupError(f"Could not load tray icon {path}: {exc}") from exc


def open_web_page(url: str) -> bool:
    opened = webbrowser.open(url)
    if not opened:
        logger.warning("No browser available to open %s", url)
    return opened
