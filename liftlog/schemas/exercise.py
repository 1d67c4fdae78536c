"""Exercise schemas (reference catalog entries)."""

from pydantic import BaseModel, ConfigDict

from liftlog.core.enums import EquipmentType, ExerciseCategory, MuscleGroup


class Exercise(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: ExerciseCategory
    primary_muscles: list[MuscleGroup]
    secondary_muscles: list[MuscleGroup] = []
    equipment: list[EquipmentType] = []
    instructions: list[str] = []
    tips: list[str] = []
    difficulty: int = 3
    variations: list[str] = []
    warnings: list[str] = []
