"""Form state for the property survey app."""
from dataclasses import dataclass, field
from typing import Optional

from shared.enums import PropertyType, ControllerStatus, NoticeKind
from shared.schemas import PropertyRecord


@dataclass
class Notice:
    """A message shown to the field agent."""
    kind: NoticeKind
    message: str


@dataclass
class FormState:
    """State owned by the form controller.

    Holds the record being filled, the active tab and which asynchronous
    operation (if any) is in flight.
    """
    active_type: PropertyType = PropertyType.LAND
    record: PropertyRecord = field(default_factory=PropertyRecord.fresh)
    status: ControllerStatus = ControllerStatus.IDLE
    last_notice: Optional[Notice] = None

    @property
    def is_idle(self):
        return self.status is ControllerStatus.IDLE

    @property
    def is_submitting(self):
        return self.status is ControllerStatus.SUBMITTING

    @property
    def is_capturing_location(self):
        return self.status is ControllerStatus.LOCATION_CAPTURING

    def reset_record(self):
        """Replace the record with an empty one for the active tab."""
        self.record = PropertyRecord.fresh(self.active_type)
        return self.record
