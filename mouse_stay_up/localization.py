import locale
from typing import Dict


DEFAULT_LANGUAGE = "en"
SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "ru")


def _normalized(lang: str | None) -> str | None:
    if not lang:
        return None
    code = lang.replace("_", "-").split("-")[0].lower()
    if code in SUPPORTED_LANGUAGES:
        return code
    return None


def normalize_language_code(value: str | None) -> str:
    code = _normalized(value)
    return code if code else DEFAULT_LANGUAGE


def detect_system_language(default: str = DEFAULT_LANGUAGE) -> str:
    """Detects system language from the current locale; falls back to default."""
    try:
        current = locale.getlocale()
    except ValueError:
        return default
    if isinstance(current, tuple) and current:
        return _normalized(current[0]) or default
    return default


TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "tray.title": "Mouse Stay Up",
        "tray.tooltip": "Enable or Disable periodic mouse movements",
        "tray.enable": "Enable",
        "tray.disable": "Disable",
        "tray.interval": "Check Interval",
        "tray.working_hours": "Working hours",
        "tray.about": "About",
        "tray.quit": "Quit",
        "interval.random": "{low}-{high} sec",
        "interval.fixed": "{seconds} sec",
    },
    "ru": {
        "tray.title": "Mouse Stay Up",
        "tray.tooltip": "Включить или выключить периодическое движение мыши",
        "tray.enable": "Включить",
        "tray.disable": "Выключить",
        "tray.interval": "Интервал",
        "tray.working_hours": "Рабочие часы",
        "tray.about": "О программе",
        "tray.quit": "Выход",
        "interval.random": "{low}-{high} сек",
        "interval.fixed": "{seconds} сек",
    },
}


class Translator:
    def __init__(self, language: str = DEFAULT_LANGUAGE):
        self.language = normalize_language_code(language)

    def translate(self, key: str, **kwargs) -> str:
        template = (
            TRANSLATIONS.get(self.language, {}).get(key)
            or TRANSLATIONS[DEFAULT_LANGUAGE].get(key)
            or key
        )
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError):
            return template
