"""Tests for the form controller."""
import asyncio
from unittest.mock import AsyncMock

import pytest

from shared.enums import (
    ControllerStatus, FieldId, NoticeKind, PropertyType, SubmissionOutcome, YesNo,
)
from shared.visibility import visible_fields
from src.survey_app.handlers.form_handler import (
    FormHandler, MSG_LOCATION_FAILURE, MSG_LOCATION_UNSUPPORTED, MSG_MISSING_REQUIRED,
    MSG_SUBMIT_FAILURE, MSG_SUBMIT_SUCCESS,
)
from src.survey_app.services.location_service import LocationUnavailable


def fill_required(handler, price='350000', informant='Maria'):
    handler.update_field(FieldId.PRICE, price)
    handler.update_field(FieldId.INFORMANT_NAME, informant)


def test_form_handler_initialization(mock_app):
    handler = FormHandler(mock_app)
    assert handler.app == mock_app
    assert handler.state.status is ControllerStatus.IDLE
    assert handler.state.record.property_type is PropertyType.LAND


class TestFieldUpdates:
    """Test tab selection and field edits."""

    def test_select_property_type_keeps_values(self, mock_app):
        handler = FormHandler(mock_app)
        handler.select_property_type(PropertyType.HOUSE)
        handler.update_field(FieldId.HAS_POOL, YesNo.YES)
        handler.select_property_type(PropertyType.LAND)

        assert mock_app.state.active_type is PropertyType.LAND
        assert mock_app.state.record.property_type is PropertyType.LAND
        assert mock_app.state.record.has_pool is YesNo.YES
        mock_app.ui_manager.refresh.assert_called()

    def test_update_field(self, mock_app):
        handler = FormHandler(mock_app)
        assert handler.update_field('lot_area', '300') is True
        assert mock_app.state.record.lot_area == '300'

    def test_update_field_rejects_invalid_choice(self, mock_app):
        handler = FormHandler(mock_app)
        assert handler.update_field(FieldId.PAVEMENT, 'Grama') is False
        assert mock_app.state.record.pavement is None

    def test_location_and_photos_not_set_directly(self, mock_app):
        handler = FormHandler(mock_app)
        with pytest.raises(ValueError):
            handler.update_field(FieldId.LOCATION, (1, 2))


class TestSubmit:
    """Test the submit flow."""

    def test_land_scenario(self, mock_app):
        handler = FormHandler(mock_app)
        handler.select_property_type(PropertyType.LAND)
        fill_required(handler)

        outcome = asyncio.run(handler.submit())

        assert outcome is SubmissionOutcome.SUCCESS
        mock_app.sheets_service.submit.assert_awaited_once()
        sent = mock_app.sheets_service.submit.await_args[0][0]
        assert sent.property_type is PropertyType.LAND
        assert sent.price == '350000'
        assert sent.informant_name == 'Maria'
        assert sent.built_area == '' and sent.condo_fee == ''
        assert sent.has_pool is None and sent.coverage is None
        assert FieldId.IS_WALLED in visible_fields(sent.property_type)
        assert 'isWalled' in sent.to_payload()

    @pytest.mark.parametrize('price,informant', [('', 'Maria'), ('350000', ''), ('', ''), ('  ', 'Maria')])
    def test_missing_required_never_calls_client(self, mock_app, price, informant):
        handler = FormHandler(mock_app)
        fill_required(handler, price, informant)

        assert asyncio.run(handler.submit()) is None

        mock_app.sheets_service.submit.assert_not_called()
        assert mock_app.state.status is ControllerStatus.IDLE
        assert mock_app.state.last_notice.kind is NoticeKind.ERROR
        assert mock_app.state.last_notice.message == MSG_MISSING_REQUIRED

    def test_success_resets_record_keeping_type(self, mock_app):
        handler = FormHandler(mock_app)
        handler.select_property_type(PropertyType.CONDO)
        fill_required(handler)
        handler.update_field(FieldId.CONDO_FEE, '500')
        handler.add_photos([b'a'])

        asyncio.run(handler.submit())

        record = mock_app.state.record
        assert record.property_type is PropertyType.CONDO
        assert record.price == '' and record.condo_fee == ''
        assert record.photos == []
        assert mock_app.state.last_notice.message == MSG_SUBMIT_SUCCESS
        mock_app.ui_manager.show_notice.assert_called_with(mock_app.state.last_notice)

    def test_reset_uses_type_active_when_response_arrives(self, mock_app):
        handler = FormHandler(mock_app)
        fill_required(handler)

        async def switch_tab_then_succeed(record):
            handler.select_property_type(PropertyType.COMMERCIAL)
            return SubmissionOutcome.SUCCESS

        mock_app.sheets_service.submit = AsyncMock(side_effect=switch_tab_then_succeed)
        asyncio.run(handler.submit())

        assert mock_app.state.record.property_type is PropertyType.COMMERCIAL
        assert mock_app.state.record.price == ''

    def test_failure_keeps_record(self, mock_app):
        mock_app.sheets_service.submit = AsyncMock(return_value=SubmissionOutcome.FAILURE)
        handler = FormHandler(mock_app)
        handler.select_property_type(PropertyType.HOUSE)
        fill_required(handler)
        handler.update_field(FieldId.BUILT_AREA, '80')
        mock_app.state.record.set_location(-7.85, -35.25)
        handler.add_photos([b'a', b'b'])
        record = mock_app.state.record
        before = record.model_dump()

        outcome = asyncio.run(handler.submit())

        assert outcome is SubmissionOutcome.FAILURE
        assert mock_app.state.record is record
        assert record.model_dump() == before
        assert mock_app.state.status is ControllerStatus.IDLE
        assert mock_app.state.last_notice.message == MSG_SUBMIT_FAILURE

    def test_unexpected_client_error_reported_as_failure(self, mock_app):
        mock_app.sheets_service.submit = AsyncMock(side_effect=RuntimeError("boom"))
        handler = FormHandler(mock_app)
        fill_required(handler)
        record = mock_app.state.record

        outcome = asyncio.run(handler.submit())

        assert outcome is SubmissionOutcome.FAILURE
        assert mock_app.state.record is record
        assert record.price != ''
        assert mock_app.state.status is ControllerStatus.IDLE
        assert mock_app.state.last_notice.kind is NoticeKind.ERROR
        assert mock_app.state.last_notice.message == MSG_SUBMIT_FAILURE

    def test_second_submit_while_in_flight_is_refused(self, mock_app):
        handler = FormHandler(mock_app)
        fill_required(handler)

        async def scenario():
            release = asyncio.Event()

            async def slow_submit(record):
                await release.wait()
                return SubmissionOutcome.SUCCESS

            mock_app.sheets_service.submit = AsyncMock(side_effect=slow_submit)
            first = asyncio.ensure_future(handler.submit())
            await asyncio.sleep(0)
            assert mock_app.state.status is ControllerStatus.SUBMITTING
            second = await handler.submit()
            release.set()
            return await first, second

        first, second = asyncio.run(scenario())

        assert first is SubmissionOutcome.SUCCESS
        assert second is None
        assert mock_app.sheets_service.submit.await_count == 1
        assert mock_app.state.status is ControllerStatus.IDLE

    def test_submit_refused_while_capturing_location(self, mock_app):
        handler = FormHandler(mock_app)
        fill_required(handler)
        mock_app.state.status = ControllerStatus.LOCATION_CAPTURING

        assert asyncio.run(handler.submit()) is None
        mock_app.sheets_service.submit.assert_not_called()


class TestLocation:
    """Test one-shot location capture."""

    def test_capture_sets_both_coordinates(self, mock_app):
        handler = FormHandler(mock_app)

        assert asyncio.run(handler.capture_location()) is True

        record = mock_app.state.record
        assert (record.latitude, record.longitude) == (-7.850833, -35.254722)
        assert mock_app.state.status is ControllerStatus.IDLE

    def test_status_while_capturing(self, mock_app):
        handler = FormHandler(mock_app)
        seen = []

        async def position():
            seen.append(mock_app.state.status)
            return 1.0, 2.0

        mock_app.location_service.current_position = AsyncMock(side_effect=position)
        asyncio.run(handler.capture_location())
        assert seen == [ControllerStatus.LOCATION_CAPTURING]

    def test_error_scenario(self, mock_app):
        mock_app.location_service.current_position = AsyncMock(
            side_effect=LocationUnavailable("permission denied")
        )
        handler = FormHandler(mock_app)

        assert asyncio.run(handler.capture_location()) is False

        record = mock_app.state.record
        assert record.latitude is None and record.longitude is None
        assert mock_app.state.status is ControllerStatus.IDLE
        assert mock_app.state.last_notice.kind is NoticeKind.ERROR
        assert mock_app.state.last_notice.message == MSG_LOCATION_FAILURE
        mock_app.ui_manager.show_notice.assert_called_once()

    def test_unsupported_device(self, mock_app):
        mock_app.location_service.current_position = AsyncMock(
            side_effect=LocationUnavailable("no gps", unsupported=True)
        )
        handler = FormHandler(mock_app)
        asyncio.run(handler.capture_location())
        assert mock_app.state.last_notice.message == MSG_LOCATION_UNSUPPORTED

    def test_refused_while_submitting(self, mock_app):
        handler = FormHandler(mock_app)
        mock_app.state.status = ControllerStatus.SUBMITTING

        assert asyncio.run(handler.capture_location()) is False
        mock_app.location_service.current_position.assert_not_called()
        assert mock_app.state.status is ControllerStatus.SUBMITTING


class TestPhotos:
    """Test photo handling."""

    def test_add_photos_truncates(self, mock_app):
        handler = FormHandler(mock_app)
        assert handler.add_photos([b'a', b'b', b'c', b'd']) == 3
        assert mock_app.state.record.photos == [b'a', b'b', b'c']
        assert mock_app.state.last_notice.kind is NoticeKind.INFO

    def test_add_no_photos(self, mock_app):
        handler = FormHandler(mock_app)
        assert handler.add_photos([]) == 0
        mock_app.ui_manager.show_notice.assert_not_called()

    def test_take_photo(self, mock_app):
        mock_app.photo_service.take_photo = AsyncMock(return_value=[b'cam'])
        handler = FormHandler(mock_app)
        asyncio.run(handler.take_photo(None))
        assert mock_app.state.record.photos == [b'cam']

    def test_take_photo_falls_back_to_gallery(self, mock_app):
        mock_app.photo_service.take_photo = AsyncMock(side_effect=NotImplementedError)
        mock_app.photo_service.pick_from_gallery = AsyncMock(return_value=[b'g1', b'g2'])
        handler = FormHandler(mock_app)

        asyncio.run(handler.take_photo(None))

        mock_app.photo_service.pick_from_gallery.assert_awaited_once_with(mock_app.main_window)
        assert mock_app.state.record.photos == [b'g1', b'g2']

    def test_choose_photos_appends(self, mock_app):
        mock_app.photo_service.pick_from_gallery = AsyncMock(return_value=[b'c', b'd'])
        handler = FormHandler(mock_app)
        handler.add_photos([b'a', b'b'])
        asyncio.run(handler.choose_photos(None))
        assert mock_app.state.record.photos == [b'a', b'b', b'c']


def test_reset_keeps_active_type(mock_app):
    handler = FormHandler(mock_app)
    handler.select_property_type(PropertyType.COMMERCIAL)
    fill_required(handler)
    handler.reset()
    assert mock_app.state.record.property_type is PropertyType.COMMERCIAL
    assert mock_app.state.record.price == ''
