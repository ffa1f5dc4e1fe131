import logging
import os
import sys

from lunar_coiner.core.cli import handle_cli_args
from lunar_coiner.core.settings import SettingsManager
from lunar_coiner.utils.translator import translator

log = logging.getLogger(__name__)


def setup_logging():
    """One-time setup of logging for all modules."""

    FORMAT = "%(levelname)s:%(name)s:%(lineno)d %(message)s"
    log_level = logging.INFO

    if getattr(sys, "frozen", False):
        # This message won't be shown to users unless they set LOG_LEVEL to DEBUG
        location = "frozen bundle"
    else:
        # Default to DEBUG for devs running from source
        log_level = logging.DEBUG
        location = "normal Python process"

    # Prefer LOG_LEVEL env var if set
    env_log_level = os.environ.get("LOG_LEVEL")
    if env_log_level is not None:
        log_level = env_log_level.upper()

    try:
        logging.basicConfig(format=FORMAT, level=log_level)
    except ValueError:
        logging.basicConfig(format=FORMAT, level=logging.INFO, force=True)
        # Only log after basicConfig!
        log.warning("Invalid LOG_LEVEL %s, defaulting to INFO", env_log_level)

    log.debug("Running in %s", location)


def apply_language(settings_manager: SettingsManager):
    language = settings_manager.get("language")
    if language and language in translator.get_available_languages():
        translator.set_language(language)
    else:
        translator.set_system_language()


def main():
    setup_logging()

    settings_manager = SettingsManager()
    apply_language(settings_manager)

    exit_code = handle_cli_args(sys.argv[1:], settings_manager)
    if exit_code is not None:
        sys.exit(exit_code)

    from PySide6.QtWidgets import QApplication

    from lunar_coiner.ui.main_window import LunarCoinerWindow

    app = QApplication(sys.argv)
    app.setApplicationName("Lunar Coiner")
    app.setStyle("Fusion")

    window = LunarCoinerWindow(settings_manager)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
