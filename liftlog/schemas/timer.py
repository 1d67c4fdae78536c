"""Rest timer schemas."""

from pydantic import BaseModel, ConfigDict, Field

from liftlog.core.enums import TimerState


class TimerSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: TimerState = TimerState.IDLE
    remaining_seconds: int = 0
    total_seconds: int = 0


class TimerStart(BaseModel):
    seconds: int | None = Field(None, gt=0)
