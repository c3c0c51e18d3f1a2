"""Public surface for the linking feature."""

from .domain.models import LinkResult, SlotInspection, SlotState
from .usecases.resolve_link import LinkResolver

__all__ = ["LinkResolver", "LinkResult", "SlotInspection", "SlotState"]
