"""Field visibility rules keyed by property type.

The form shows a common set of fields for every property type and a few
conditional ones. The rules live in a single lookup table so the UI and the
payload serializer agree on what belongs to each type.
"""
from typing import Dict, FrozenSet

from shared.enums import FieldId, PropertyType


COMMON_FIELDS: FrozenSet[FieldId] = frozenset({
    FieldId.PRICE,
    FieldId.PHONE,
    FieldId.INFORMANT_NAME,
    FieldId.LOT_AREA,
    FieldId.FRONTAGE,
    FieldId.BLOCK_POSITION,
    FieldId.TOPOGRAPHY,
    FieldId.PAVEMENT,
    FieldId.LOCATION,
    FieldId.PHOTOS,
})

# Conditional field -> property types that show it
CONDITIONAL_FIELDS: Dict[FieldId, FrozenSet[PropertyType]] = {
    FieldId.BUILT_AREA: frozenset({PropertyType.HOUSE, PropertyType.CONDO, PropertyType.COMMERCIAL}),
    FieldId.CONDO_FEE: frozenset({PropertyType.CONDO}),
    FieldId.IS_WALLED: frozenset({PropertyType.LAND}),
    FieldId.FLOORS: frozenset({PropertyType.HOUSE, PropertyType.CONDO, PropertyType.COMMERCIAL}),
    FieldId.HAS_POOL: frozenset({PropertyType.HOUSE, PropertyType.CONDO}),
    FieldId.COVERAGE: frozenset({PropertyType.HOUSE, PropertyType.COMMERCIAL}),
}


def _build_rules():
    rules = {}
    for property_type in PropertyType:
        shown = set(COMMON_FIELDS)
        shown.update(
            field for field, types in CONDITIONAL_FIELDS.items()
            if property_type in types
        )
        rules[property_type] = frozenset(shown)
    return rules


VISIBILITY_RULES: Dict[PropertyType, FrozenSet[FieldId]] = _build_rules()


def visible_fields(property_type) -> FrozenSet[FieldId]:
    """Return the fields shown on the form for a property type."""
    return VISIBILITY_RULES[PropertyType(property_type)]


def hidden_fields(property_type) -> FrozenSet[FieldId]:
    """Return the fields hidden for a property type."""
    return frozenset(FieldId) - visible_fields(property_type)


def is_visible(field, property_type) -> bool:
    return FieldId(field) in visible_fields(property_type)
