import json
import logging
import sys
from pathlib import Path

from PySide6.QtCore import QLocale

log = logging.getLogger(__name__)


def _translations_dir() -> Path:
    """Bundled translations, or the frozen build's copy of them."""
    if getattr(sys, "frozen", False):
        base = getattr(sys, "_MEIPASS", None) or Path(sys.executable).parent
        return Path(base) / "resources" / "translations"
    return Path(__file__).resolve().parent.parent / "resources" / "translations"


class Translator:
    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self.current_language = "en"
            self.translations: dict[str, dict[str, str]] = {}
            self._load_translations()
            self._initialized = True

    def _load_translations(self):
        """Load all available translations from JSON files"""
        translations_dir = _translations_dir()
        if not translations_dir.is_dir():
            log.warning("Translations directory %s not found", translations_dir)
        else:
            for file_path in sorted(translations_dir.glob("*.json")):
                try:
                    with open(file_path, "r", encoding="utf-8") as f:
                        self.translations[file_path.stem] = json.load(f)
                except (OSError, json.JSONDecodeError) as e:
                    log.error("Cannot load translation file %s: %s", file_path.name, e)

        if "en" not in self.translations:
            self.translations["en"] = {}

    def set_language(self, language_code: str):
        """Set the current language"""
        if language_code in self.translations:
            self.current_language = language_code
        else:
            log.warning("Translation for %s not found. Using English.", language_code)
            self.current_language = "en"

    def set_system_language(self):
        """Set language based on system locale"""
        system_locale = QLocale.system().name()
        # "de" from "de_DE"
        language_code = system_locale.split("_")[0]

        if language_code in self.translations:
            self.current_language = language_code
        elif system_locale in self.translations:
            self.current_language = system_locale
        else:
            log.debug("System locale %s not supported. Using English.", system_locale)
            self.current_language = "en"

    def tr(self, key: str, **kwargs) -> str:
        """Translate a string using the current language"""
        # Current language, then English, then the key itself
        translation = self.translations.get(self.current_language, {}).get(
            key, self.translations.get("en", {}).get(key, key)
        )

        if kwargs:
            try:
                translation = translation.format(**kwargs)
            except KeyError as e:
                log.error(
                    "Cannot format translation for key %s: missing argument %s", key, e
                )

        return translation

    def get_available_languages(self) -> dict[str, str]:
        """Get available languages with their names"""
        return {
            code: strings.get("language_name", code)
            for code, strings in self.translations.items()
        }


# Global translator instance
translator = Translator()


def tr(key: str, **kwargs) -> str:
    """Global translation function"""
    return translator.tr(key, **kwargs)
