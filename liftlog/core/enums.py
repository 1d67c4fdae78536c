"""Shared enums for models and API."""

from enum import Enum


class WorkoutType(str, Enum):
    """Kind of training session."""

    STRENGTH = "strength"
    CARDIO = "cardio"
    HYBRID = "hybrid"
    FLEXIBILITY = "flexibility"
    SPORTS = "sports"


class ExerciseCategory(str, Enum):
    COMPOUND = "compound"
    ISOLATION = "isolation"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    PLYOMETRIC = "plyometric"
    FUNCTIONAL = "functional"


class MuscleGroup(str, Enum):
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FOREARMS = "forearms"
    CORE = "core"
    QUADS = "quad"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    FULL_BODY = "full_body"


class EquipmentType(str, Enum):
    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    CABLE = "cable"
    MACHINE = "machine"
    BODYWEIGHT = "bodyweight"
    KETTLEBELL = "kettlebell"
    RESISTANCE_BAND = "resistance_band"
    CARDIO_MACHINE = "cardio_machine"


class PRType(str, Enum):
    """Type of personal record."""

    MAX_WEIGHT = "max_weight"  # Heaviest single set
    MAX_REPS = "max_reps"  # Most reps in one set, any weight
    MAX_VOLUME = "max_volume"  # Best single-session weight × reps for the exercise


class TimerState(str, Enum):
    """Rest timer states."""

    IDLE = "idle"
    RUNNING = "running"
    EXPIRED = "expired"


class OneRMFormula(str, Enum):
    BRZYCKI = "brzycki"
    EPLEY = "epley"
