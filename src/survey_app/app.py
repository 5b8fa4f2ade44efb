"""Property Survey App - Main application."""
import logging

import toga

from .config_manager import ConfigManager
from .handlers.form_handler import FormHandler
from .logging_config import setup_logging
from .services.location_service import LocationService
from .services.photo_service import PhotoService
from .services.sheets_service import SheetsService
from .state import FormState
from .ui_manager import UIManager


class PropertySurveyApp(toga.App):
    """Field form for real-estate price surveys."""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)
        super().__init__(formal_name='Observatório de Valores', app_id='br.carpina.propertysurvey')

    def startup(self):
        """Initialize the app"""
        setup_logging()
        self.logger.info("Starting PropertySurveyApp initialization")

        self.config = ConfigManager()
        self.logger.info(f"Configuration loaded: submission URL={self.config.submission_url}")

        self.sheets_service = SheetsService(
            self.config.submission_url,
            timeout=self.config.submission_timeout,
        )
        if not self.sheets_service.is_configured:
            self.logger.warning("Submission URL is not configured; submissions will fail")

        self.location_service = LocationService(
            self._device_location(),
            request_permission=self.config.location_permission_required,
        )
        self.photo_service = PhotoService(self)

        self.state = FormState()
        self.form_handler = FormHandler(self)

        self.ui_manager = UIManager(self)
        self.main_window = toga.MainWindow(title=self.formal_name)
        self.ui_manager.main_window = self.main_window
        self.ui_manager.create_main_ui()

        self.main_window.show()
        self.logger.info("PropertySurveyApp initialization completed successfully")

    def _device_location(self):
        """Return the platform location service, or None when there is none."""
        try:
            return self.location
        except NotImplementedError:
            self.logger.warning("Location services are not available on this platform")
            return None


def main():
    return PropertySurveyApp()
