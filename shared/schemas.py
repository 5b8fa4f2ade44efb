"""Pydantic schemas for the property survey record."""
import base64
import enum
from typing import Optional, List, Dict, Any, Iterable

from pydantic import BaseModel, Field, field_validator, ConfigDict

from shared.enums import (
    PropertyType, BlockPosition, Topography, Floors, Pavement, YesNo, Coverage, FieldId,
)
from shared.validation import Validator
from shared.visibility import visible_fields

MAX_PHOTOS = 3

# Payload keys expected by the spreadsheet ingestion script
PAYLOAD_KEYS: Dict[FieldId, str] = {
    FieldId.PRICE: 'price',
    FieldId.PHONE: 'phone',
    FieldId.INFORMANT_NAME: 'informantName',
    FieldId.LOT_AREA: 'lotArea',
    FieldId.BUILT_AREA: 'builtArea',
    FieldId.FRONTAGE: 'frontage',
    FieldId.CONDO_FEE: 'condoFee',
    FieldId.BLOCK_POSITION: 'blockPosition',
    FieldId.TOPOGRAPHY: 'topography',
    FieldId.FLOORS: 'floors',
    FieldId.PAVEMENT: 'pavement',
    FieldId.HAS_POOL: 'hasPool',
    FieldId.IS_WALLED: 'isWalled',
    FieldId.COVERAGE: 'coverageType',
}


class Coordinates(BaseModel):
    """A latitude/longitude pair. Both values are always present."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    model_config = ConfigDict(frozen=True)


class PropertyRecord(BaseModel):
    """One property survey entry.

    The record is mutated field by field while the agent fills the form.
    Assignments are validated, so enum fields only ever hold a member or
    None (unset) and the photo list never grows past MAX_PHOTOS.

    Coordinates are stored as a single optional pair, so latitude and
    longitude are either both set or both None.
    """
    property_type: PropertyType = PropertyType.LAND
    price: str = ''
    phone: str = ''
    informant_name: str = ''
    lot_area: str = ''
    built_area: str = ''
    frontage: str = ''
    condo_fee: str = ''
    block_position: Optional[BlockPosition] = None
    topography: Optional[Topography] = None
    floors: Optional[Floors] = None
    pavement: Optional[Pavement] = None
    has_pool: Optional[YesNo] = None
    is_walled: Optional[YesNo] = None
    coverage: Optional[Coverage] = None
    location: Optional[Coordinates] = None
    photos: List[bytes] = Field(default_factory=list)

    model_config = ConfigDict(validate_assignment=True, extra='forbid')

    @field_validator('block_position', 'topography', 'floors', 'pavement',
                     'has_pool', 'is_walled', 'coverage', mode='before')
    @classmethod
    def empty_choice_is_unset(cls, v):
        if v == '':
            return None
        return v

    @field_validator('price', 'phone', 'informant_name', 'lot_area',
                     'built_area', 'frontage', 'condo_fee', mode='before')
    @classmethod
    def text_fields(cls, v):
        if v is None:
            return ''
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator('photos')
    @classmethod
    def truncate_photos(cls, v):
        return v[:MAX_PHOTOS]

    @classmethod
    def fresh(cls, property_type=PropertyType.LAND):
        """Create an empty record for the given property type."""
        return cls(property_type=property_type)

    @property
    def latitude(self) -> Optional[float]:
        return self.location.latitude if self.location else None

    @property
    def longitude(self) -> Optional[float]:
        return self.location.longitude if self.location else None

    @property
    def has_location(self) -> bool:
        return self.location is not None

    def set_location(self, latitude, longitude):
        """Set both coordinates in one step."""
        lat, lng = Validator.validate_coordinates(latitude, longitude)
        self.location = Coordinates(latitude=lat, longitude=lng)

    def clear_location(self):
        self.location = None

    def add_photos(self, photos: Iterable[bytes]) -> int:
        """Append photos, keeping the earliest MAX_PHOTOS.

        Returns the number of photos actually stored from this call.
        """
        before = len(self.photos)
        self.photos = list(self.photos) + list(photos)
        return len(self.photos) - before

    @property
    def remaining_photo_slots(self) -> int:
        return MAX_PHOTOS - len(self.photos)

    def to_payload(self, visible_only: bool = True) -> Dict[str, Any]:
        """Serialize the record for the spreadsheet endpoint.

        With visible_only, fields hidden for the record's property type are
        left out, so values typed under another tab are never sent.
        Photos are base64 encoded.
        """
        shown = visible_fields(self.property_type) if visible_only else frozenset(FieldId)

        payload: Dict[str, Any] = {'propertyType': self.property_type.value}
        for field_id, key in PAYLOAD_KEYS.items():
            if field_id not in shown:
                continue
            value = getattr(self, field_id.value)
            if value is None:
                value = ''
            elif isinstance(value, enum.Enum):
                value = value.value
            payload[key] = value

        if FieldId.LOCATION in shown:
            payload['latitude'] = self.latitude
            payload['longitude'] = self.longitude
        if FieldId.PHOTOS in shown:
            payload['photos'] = [base64.b64encode(photo).decode('ascii') for photo in self.photos]
        return payload
