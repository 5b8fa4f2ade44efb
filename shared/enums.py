import enum


class PropertyType(str, enum.Enum):
    """Property classification selected on the tab bar.

    Drives which optional attributes are collected for a record.
    """
    LAND = "Terreno"
    HOUSE = "Casa"
    CONDO = "Cond/Apto"
    COMMERCIAL = "Comercial"


class BlockPosition(str, enum.Enum):
    """Where the parcel sits relative to its city block."""
    CORNER = "Esquina"
    MID_BLOCK = "Meio de quadra"
    REAR = "Fundos"


class Topography(str, enum.Enum):
    """Grade of the parcel relative to street level."""
    LEVEL = "Plano ao nível"
    ABOVE_GRADE = "Acima do nível"
    BELOW_GRADE = "Abaixo do nível"
    UNEVEN = "Acidentado/Inclinado"


class Floors(str, enum.Enum):
    """Number of storeys for built properties."""
    GROUND_ONLY = "Térreo"
    MULTIPLE = "Andares"


class Pavement(str, enum.Enum):
    """Street surface in front of the parcel."""
    UNPAVED = "Solo"
    COBBLESTONE = "Paralelepípedo"
    ASPHALT = "Asfalto"


class YesNo(str, enum.Enum):
    """Answer for yes/no attributes. Unset is represented by None."""
    YES = "Sim"
    NO = "Não"


class Coverage(str, enum.Enum):
    """Roofing construction style."""
    SLAB = "Laje"
    ROOF_TILE = "Telhado"
    OTHER = "Outro"


class FieldId(str, enum.Enum):
    """Identifiers of every field shown on the survey form.

    Values match the attribute names on PropertyRecord, except LOCATION
    (the latitude/longitude pair) and PHOTOS.
    """
    PRICE = "price"
    PHONE = "phone"
    INFORMANT_NAME = "informant_name"
    LOT_AREA = "lot_area"
    BUILT_AREA = "built_area"
    FRONTAGE = "frontage"
    CONDO_FEE = "condo_fee"
    BLOCK_POSITION = "block_position"
    TOPOGRAPHY = "topography"
    FLOORS = "floors"
    PAVEMENT = "pavement"
    HAS_POOL = "has_pool"
    IS_WALLED = "is_walled"
    COVERAGE = "coverage"
    LOCATION = "location"
    PHOTOS = "photos"


class SubmissionOutcome(str, enum.Enum):
    """Result of sending a record to the spreadsheet endpoint."""
    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def succeeded(self):
        return self is SubmissionOutcome.SUCCESS


class ControllerStatus(str, enum.Enum):
    """Activity state of the form controller.

    Only one asynchronous operation may be in flight at a time.
    """
    IDLE = "idle"
    SUBMITTING = "submitting"
    LOCATION_CAPTURING = "location_capturing"


class NoticeKind(str, enum.Enum):
    """Severity of a message surfaced to the field agent."""
    INFO = "info"
    ERROR = "error"
