"""Input validation utilities."""
from shared.enums import FieldId


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message, fields=None):
        super().__init__(message)
        self.fields = list(fields or [])


# Fields that must be filled before a record can be submitted, with the
# labels the form shows for them.
REQUIRED_FIELDS = {
    FieldId.PRICE: 'Preço',
    FieldId.INFORMANT_NAME: 'Informante',
}


class Validator:
    """Input validation utilities."""

    @staticmethod
    def validate_required(value, field_name):
        """Validate that a required field is not empty."""
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{field_name} is required", fields=[field_name])
        return value

    @staticmethod
    def validate_coordinates(lat, lng):
        """Validate a GPS coordinate pair and return it as floats."""
        try:
            lat_val = float(lat)
        except (ValueError, TypeError):
            raise ValidationError(f"Latitude must be a valid number, got '{lat}'")
        try:
            lng_val = float(lng)
        except (ValueError, TypeError):
            raise ValidationError(f"Longitude must be a valid number, got '{lng}'")

        if not (-90 <= lat_val <= 90):
            raise ValidationError("Latitude must be between -90 and 90")
        if not (-180 <= lng_val <= 180):
            raise ValidationError("Longitude must be between -180 and 180")

        return lat_val, lng_val

    @staticmethod
    def validate_for_submission(record):
        """Check the minimum a record needs before it is sent.

        Raises ValidationError listing every missing required field, so the
        form can report them all at once.
        """
        missing = []
        for field_id, label in REQUIRED_FIELDS.items():
            try:
                Validator.validate_required(getattr(record, field_id.value), label)
            except ValidationError:
                missing.append(field_id)

        if missing:
            labels = ', '.join(REQUIRED_FIELDS[field_id] for field_id in missing)
            raise ValidationError(f"Missing required fields: {labels}", fields=missing)
        return record
