"""Property form handlers for SurveyApp."""
import logging

from pydantic import ValidationError as SchemaValidationError

from shared.enums import ControllerStatus, FieldId, NoticeKind, PropertyType, SubmissionOutcome
from shared.validation import ValidationError, Validator
from ..services.location_service import LocationUnavailable
from ..state import Notice

MSG_MISSING_REQUIRED = "Por favor, preencha pelo menos o Preço e o Informante."
MSG_SUBMIT_SUCCESS = "Dados enviados com sucesso para a planilha!"
MSG_SUBMIT_FAILURE = "Erro ao enviar. Tente novamente."
MSG_LOCATION_FAILURE = "Erro ao obter localização. Verifique as permissões."
MSG_LOCATION_UNSUPPORTED = "Geolocalização não é suportada pelo seu dispositivo."
MSG_PHOTOS_FULL = "Limite de 3 fotos atingido."

# Fields set through dedicated actions rather than update_field
_ACTION_FIELDS = (FieldId.LOCATION, FieldId.PHOTOS)


class FormHandler:
    """Drives the survey form.

    Owns the transitions between idle, submitting and location capturing.
    At most one asynchronous operation runs at a time; a request made
    while another is in flight is refused, not queued.
    """

    def __init__(self, app):
        self.app = app
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def state(self):
        return self.app.state

    def _refresh(self):
        self.app.ui_manager.refresh()

    def _notify(self, kind, message):
        notice = Notice(kind=kind, message=message)
        self.state.last_notice = notice
        self.app.ui_manager.show_notice(notice)
        return notice

    def select_property_type(self, property_type):
        """Switch the active tab.

        Values typed into fields the new type hides are kept on the record
        but are left out of the submitted payload.
        """
        property_type = PropertyType(property_type)
        self.state.active_type = property_type
        self.state.record.property_type = property_type
        self.logger.debug(f"Property type changed to {property_type.value}")
        self._refresh()

    def update_field(self, field_id, value):
        """Store one form value on the record.

        Returns False when the value is rejected by the record schema.
        """
        field_id = FieldId(field_id)
        if field_id in _ACTION_FIELDS:
            raise ValueError(f"{field_id.value} cannot be set directly")

        try:
            setattr(self.state.record, field_id.value, value)
        except SchemaValidationError as e:
            self.logger.warning(f"Rejected value for {field_id.value}: {e}")
            return False
        return True

    def add_photos(self, photos):
        """Append photos, keeping only the first three on the record."""
        photos = list(photos)
        if not photos:
            return 0
        stored = self.state.record.add_photos(photos)
        if stored < len(photos):
            self.logger.info(f"Dropped {len(photos) - stored} photo(s) over the limit")
            self._notify(NoticeKind.INFO, MSG_PHOTOS_FULL)
        self._refresh()
        return stored

    async def take_photo(self, widget=None):
        """Camera button handler, falls back to the gallery without a camera."""
        try:
            photos = await self.app.photo_service.take_photo()
        except NotImplementedError:
            self.logger.warning("Camera not available on this platform, using gallery")
            photos = await self.app.photo_service.pick_from_gallery(self.app.main_window)
        return self.add_photos(photos)

    async def choose_photos(self, widget=None):
        """Gallery button handler."""
        photos = await self.app.photo_service.pick_from_gallery(self.app.main_window)
        return self.add_photos(photos)

    async def capture_location(self, widget=None):
        """Ask the device for its position once.

        On failure the coordinates are left as they were and a notice is
        shown. Returns True when coordinates were stored.
        """
        if not self.state.is_idle:
            self.logger.warning(f"Location request ignored while {self.state.status.value}")
            return False

        self.state.status = ControllerStatus.LOCATION_CAPTURING
        self._refresh()
        try:
            latitude, longitude = await self.app.location_service.current_position()
            self.state.record.set_location(latitude, longitude)
        except LocationUnavailable as e:
            self.logger.warning(f"Location unavailable: {e}")
            message = MSG_LOCATION_UNSUPPORTED if e.unsupported else MSG_LOCATION_FAILURE
            self._notify(NoticeKind.ERROR, message)
            return False
        except ValidationError as e:
            self.logger.error(f"Device returned invalid coordinates: {e}")
            self._notify(NoticeKind.ERROR, MSG_LOCATION_FAILURE)
            return False
        finally:
            self.state.status = ControllerStatus.IDLE
            self._refresh()
        return True

    async def submit(self, widget=None):
        """Validate and send the current record.

        Returns the SubmissionOutcome, or None when nothing was sent
        (another operation in flight or required fields missing).
        """
        if not self.state.is_idle:
            self.logger.warning(f"Submit ignored while {self.state.status.value}")
            return None

        record = self.state.record
        try:
            Validator.validate_for_submission(record)
        except ValidationError as e:
            self.logger.info(f"Submission blocked: {e}")
            self._notify(NoticeKind.ERROR, MSG_MISSING_REQUIRED)
            return None

        self.state.status = ControllerStatus.SUBMITTING
        self._refresh()
        try:
            outcome = await self.app.sheets_service.submit(record)
        except Exception as e:
            self.logger.error(f"Unexpected error while submitting: {e}", exc_info=True)
            outcome = SubmissionOutcome.FAILURE
        finally:
            self.state.status = ControllerStatus.IDLE

        if outcome.succeeded:
            self.state.reset_record()
            self._notify(NoticeKind.INFO, MSG_SUBMIT_SUCCESS)
        else:
            self._notify(NoticeKind.ERROR, MSG_SUBMIT_FAILURE)
        self._refresh()
        return outcome

    def reset(self, widget=None):
        """Discard the current record, keeping the active property type."""
        self.state.reset_record()
        self._refresh()
