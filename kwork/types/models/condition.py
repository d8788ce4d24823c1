from datetime import datetime
from typing import Optional
from kwork.types.base import BaseModel

CONDITION_TRUE = "True"
CONDITION_FALSE = "False"
CONDITION_UNKNOWN = "Unknown"

CONDITION_STATUSES = (CONDITION_TRUE, CONDITION_FALSE, CONDITION_UNKNOWN)


class StatusCondition(BaseModel):
    """A named status value with the time its status last changed."""

    type: str
    status: str
    reason: str
    message: str
    last_transition_time: Optional[datetime]

    def __init__(
        self,
        type: str = None,
        status: str = CONDITION_UNKNOWN,
        reason: str = "",
        message: str = "",
        last_transition_time: Optional[datetime] = None,
        **kwargs,
    ) -> None:
        super().__init__(
            type=type,
            status=status,
            reason=reason,
            message=message,
            last_transition_time=last_transition_time,
            **kwargs,
        )

    def same_state(self, other: "StatusCondition") -> bool:
        """True if status, reason and message all match."""
        return (self.status, self.reason, self.message) == (
            other.status,
            other.reason,
            other.message,
        )
