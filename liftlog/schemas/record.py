"""Personal record schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from liftlog.core.enums import PRType
from liftlog.schemas.workout import new_id


class PersonalRecord(BaseModel):
    """Append-only PR row. The current best is resolved by query, never by a pointer."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str = Field(default_factory=new_id)
    exercise_id: str
    record_type: PRType
    value: float
    achieved_at: datetime
    session_id: str
