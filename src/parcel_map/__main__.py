"""
Main entry point for parcel_map.
Usage: python -m parcel_map [LISTINGS.json]
"""

import sys
import logging
from pathlib import Path
from typing import List, Optional

from PySide6.QtWidgets import QApplication, QMessageBox

from . import __version__
from .properties import DataLoadError, PropertyDataService
from .settings import AppSettings, ConfigError
from .gui.main_window import MainWindow
from .utils.logging_config import setup_logging


def show_error_dialog(title: str, message: str, details: Optional[str] = None) -> None:
    """Show error dialog to user."""
    app = QApplication.instance()
    if not app:
        app = QApplication(sys.argv)

    msg_box = QMessageBox()
    msg_box.setIcon(QMessageBox.Icon.Critical)
    msg_box.setWindowTitle(title)
    msg_box.setText(message)

    if details:
        msg_box.setDetailedText(details)

    msg_box.exec()


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    argv = sys.argv if argv is None else argv
    logger = logging.getLogger(f"{__name__}.main")
    try:
        settings = AppSettings()

        app = QApplication(argv)
        app.setApplicationName("parcel_map")
        app.setApplicationVersion(__version__)
        app.setStyle("Fusion")

        setup_logging(settings)
        logger.info("Starting parcel_map")
        logger.info(f"Configuration loaded from {settings.get_settings_file_path()}")

        validation = settings.validate()
        for warning in validation.warnings:
            logger.warning(f"  {warning}")
        if not validation.is_valid:
            logger.error("Configuration validation failed:")
            for error in validation.errors:
                logger.error(f"  {error}")
            show_error_dialog(
                "Configuration Error",
                "Configuration validation failed. Please check your settings.",
                "\n".join(validation.errors),
            )
            return 1

        if len(argv) > 1:
            data_file: Optional[Path] = Path(argv[1])
        else:
            # The last file is only reopened if it is still there
            data_file = settings.paths.last_data_file
            if data_file is not None and not data_file.exists():
                data_file = None

        service = PropertyDataService()
        if data_file:
            try:
                service = PropertyDataService.load_json(data_file)
                settings.remember_data_file(data_file)
            except DataLoadError as e:
                logger.error(f"Failed to load listings: {e}")
                show_error_dialog("Listings not loaded", "Could not load listings file.", str(e))

        window = MainWindow(settings, service)
        window.show()
        settings.set_first_run_complete()

        logger.info("Application started successfully")
        return app.exec()

    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        show_error_dialog("Configuration Error", "Settings could not be accessed.", str(e))
        return 1
    except Exception as e:
        logger.exception("Unhandled exception in main")
        show_error_dialog("Application Error", "An unexpected error occurred.", str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
