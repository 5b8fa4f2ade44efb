"""Pytest configuration and fixtures for property survey tests."""
import io
from unittest.mock import AsyncMock, Mock

import pytest
from PIL import Image

from shared.enums import PropertyType, SubmissionOutcome
from shared.schemas import PropertyRecord
from src.survey_app.state import FormState


class MockApp:
    """Mock app class for testing handlers."""
    def __init__(self):
        self.state = FormState()
        self.config = Mock()
        self.config.photo_thumbnail_size = 100
        self.ui_manager = Mock()
        self.main_window = Mock()

        self.sheets_service = Mock()
        self.sheets_service.submit = AsyncMock(return_value=SubmissionOutcome.SUCCESS)

        self.location_service = Mock()
        self.location_service.current_position = AsyncMock(return_value=(-7.850833, -35.254722))

        self.photo_service = Mock()
        self.photo_service.take_photo = AsyncMock(return_value=[])
        self.photo_service.pick_from_gallery = AsyncMock(return_value=[])


@pytest.fixture
def mock_app():
    """Create a mock app for testing."""
    return MockApp()


@pytest.fixture
def land_record():
    """A Land record with the required fields filled."""
    record = PropertyRecord.fresh(PropertyType.LAND)
    record.price = '350000'
    record.informant_name = 'Maria'
    return record


@pytest.fixture
def jpeg_bytes():
    """Small JPEG image as raw bytes."""
    buffer = io.BytesIO()
    Image.new('RGB', (640, 480), color='red').save(buffer, format='JPEG')
    return buffer.getvalue()
