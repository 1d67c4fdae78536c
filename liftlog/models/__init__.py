"""ORM models - import all so Base.metadata is complete for migrations."""

from liftlog.models.personal_record import PersonalRecordRow
from liftlog.models.session import WorkoutSessionRow
from liftlog.models.template import WorkoutTemplateRow

__all__ = [
    "PersonalRecordRow",
    "WorkoutSessionRow",
    "WorkoutTemplateRow",
]
