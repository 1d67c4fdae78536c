"""Reference catalog: static exercise definitions and prebuilt templates.

Hardcoded for O(1) lookups by id. Read-only for the process lifetime; the
session engine copies descriptive fields into its own records so later
catalog edits never rewrite history.
"""

from datetime import datetime, timezone

from liftlog.core.enums import (
    EquipmentType as Eq,
    ExerciseCategory as Cat,
    MuscleGroup as M,
    WorkoutType,
)
from liftlog.schemas.exercise import Exercise
from liftlog.schemas.template import TemplateExercise, WorkoutTemplate

_CATALOG_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)

EXERCISES: list[Exercise] = [
    # Chest
    Exercise(
        id="bench-press",
        name="Bench Press",
        category=Cat.COMPOUND,
        primary_muscles=[M.CHEST],
        secondary_muscles=[M.SHOULDERS, M.TRICEPS],
        equipment=[Eq.BARBELL],
        instructions=[
            "Lie on the bench with your eyes under the bar",
            "Lower the bar to your chest with control",
            "Press the bar back up to starting position",
        ],
        tips=["Keep your shoulder blades retracted and down", "Don't bounce the bar off your chest"],
        difficulty=3,
        variations=["Incline Bench Press", "Decline Bench Press", "Dumbbell Bench Press"],
        warnings=["Use a spotter for heavy weights"],
    ),
    Exercise(
        id="incline-bench-press",
        name="Incline Bench Press",
        category=Cat.COMPOUND,
        primary_muscles=[M.CHEST],
        secondary_muscles=[M.SHOULDERS, M.TRICEPS],
        equipment=[Eq.BARBELL],
        instructions=["Set the bench to a 30-45 degree incline", "Lower the bar to your upper chest"],
        tips=["Focus on the upper chest muscles"],
        difficulty=3,
    ),
    Exercise(
        id="push-up",
        name="Push-up",
        category=Cat.COMPOUND,
        primary_muscles=[M.CHEST],
        secondary_muscles=[M.SHOULDERS, M.TRICEPS, M.CORE],
        equipment=[Eq.BODYWEIGHT],
        instructions=["Start in a plank position", "Lower until your chest nearly touches the floor"],
        tips=["Keep your body in a straight line"],
        difficulty=2,
        variations=["Incline Push-up", "Diamond Push-up", "Wide-Grip Push-up"],
    ),
    # Back
    Exercise(
        id="deadlift",
        name="Deadlift",
        category=Cat.COMPOUND,
        primary_muscles=[M.BACK, M.GLUTES, M.HAMSTRINGS],
        secondary_muscles=[M.CORE, M.FOREARMS],
        equipment=[Eq.BARBELL],
        instructions=["Stand with feet hip-width apart, bar over mid-foot", "Drive through your heels to lift the bar"],
        tips=["Keep the bar close to your body throughout"],
        difficulty=4,
        warnings=["Never round your back under load"],
    ),
    Exercise(
        id="pull-up",
        name="Pull-up",
        category=Cat.COMPOUND,
        primary_muscles=[M.BACK],
        secondary_muscles=[M.BICEPS, M.CORE],
        equipment=[Eq.BODYWEIGHT],
        instructions=["Hang from the bar with an overhand grip", "Pull until your chin clears the bar"],
        tips=["Avoid swinging"],
        difficulty=4,
    ),
    # Legs
    Exercise(
        id="squat",
        name="Back Squat",
        category=Cat.COMPOUND,
        primary_muscles=[M.QUADS, M.GLUTES],
        secondary_muscles=[M.HAMSTRINGS, M.CORE],
        equipment=[Eq.BARBELL],
        instructions=["Position the bar on your upper back", "Sit back and down until thighs are parallel"],
        tips=["Keep your knees tracking over your toes"],
        difficulty=4,
    ),
    Exercise(
        id="lunges",
        name="Lunges",
        category=Cat.COMPOUND,
        primary_muscles=[M.QUADS, M.GLUTES],
        secondary_muscles=[M.HAMSTRINGS, M.CORE],
        equipment=[Eq.BODYWEIGHT, Eq.DUMBBELL],
        instructions=["Step forward and lower your back knee toward the floor"],
        tips=["Keep your torso upright"],
        difficulty=2,
    ),
    # Shoulders
    Exercise(
        id="overhead-press",
        name="Overhead Press",
        category=Cat.COMPOUND,
        primary_muscles=[M.SHOULDERS],
        secondary_muscles=[M.TRICEPS, M.CORE],
        equipment=[Eq.BARBELL],
        instructions=["Start with the bar at shoulder height", "Press the bar straight overhead"],
        tips=["Squeeze your glutes to avoid arching"],
        difficulty=3,
    ),
    # Arms
    Exercise(
        id="dumbbell-curl",
        name="Dumbbell Bicep Curl",
        category=Cat.ISOLATION,
        primary_muscles=[M.BICEPS],
        secondary_muscles=[M.FOREARMS],
        equipment=[Eq.DUMBBELL],
        instructions=["Curl the weights while keeping elbows at your sides"],
        tips=["Control the lowering phase"],
        difficulty=2,
    ),
    Exercise(
        id="tricep-dip",
        name="Tricep Dips",
        category=Cat.COMPOUND,
        primary_muscles=[M.TRICEPS],
        secondary_muscles=[M.SHOULDERS, M.CHEST],
        equipment=[Eq.BODYWEIGHT],
        instructions=["Lower your body by bending the elbows", "Press back up to full extension"],
        tips=["Keep your body close to the bench or bars"],
        difficulty=3,
    ),
    # Core
    Exercise(
        id="plank",
        name="Plank",
        category=Cat.ISOLATION,
        primary_muscles=[M.CORE],
        secondary_muscles=[M.SHOULDERS, M.GLUTES],
        equipment=[Eq.BODYWEIGHT],
        instructions=["Hold a straight line from head to heels on your forearms"],
        tips=["Don't let your hips sag"],
        difficulty=2,
    ),
]

TEMPLATES: list[WorkoutTemplate] = [
    WorkoutTemplate(
        id="upper-body-strength",
        name="Upper Body Strength",
        description="Focus on building strength in chest, back, shoulders, and arms",
        workout_type=WorkoutType.STRENGTH,
        exercises=[
            TemplateExercise(exercise_id="bench-press", target_sets=4, target_reps=6, rest_seconds=180, order_index=0),
            TemplateExercise(exercise_id="pull-up", target_sets=3, target_reps=8, rest_seconds=120, order_index=1),
            TemplateExercise(exercise_id="overhead-press", target_sets=3, target_reps=8, rest_seconds=120, order_index=2),
            TemplateExercise(exercise_id="dumbbell-curl", target_sets=3, target_reps=12, rest_seconds=90, order_index=3),
            TemplateExercise(exercise_id="tricep-dip", target_sets=3, target_reps=10, rest_seconds=90, order_index=4),
        ],
        estimated_duration_minutes=75,
        difficulty=4,
        tags=["strength", "upper-body", "compound"],
        is_custom=False,
        created_at=_CATALOG_EPOCH,
    ),
    WorkoutTemplate(
        id="lower-body-power",
        name="Lower Body Power",
        description="Build leg strength and power with compound movements",
        workout_type=WorkoutType.STRENGTH,
        exercises=[
            TemplateExercise(exercise_id="squat", target_sets=4, target_reps=5, rest_seconds=180, order_index=0),
            TemplateExercise(exercise_id="deadlift", target_sets=3, target_reps=5, rest_seconds=180, order_index=1),
            TemplateExercise(exercise_id="lunges", target_sets=3, target_reps=12, rest_seconds=90, order_index=2),
        ],
        estimated_duration_minutes=60,
        difficulty=4,
        tags=["strength", "lower-body", "power"],
        is_custom=False,
        created_at=_CATALOG_EPOCH,
    ),
    WorkoutTemplate(
        id="full-body-beginner",
        name="Full Body Beginner",
        description="Perfect starter workout covering all major muscle groups",
        workout_type=WorkoutType.STRENGTH,
        exercises=[
            TemplateExercise(exercise_id="push-up", target_sets=3, target_reps=10, rest_seconds=60, order_index=0),
            TemplateExercise(exercise_id="squat", target_sets=3, target_reps=12, rest_seconds=60, order_index=1),
            TemplateExercise(exercise_id="pull-up", target_sets=3, target_reps=5, rest_seconds=90, order_index=2),
            TemplateExercise(exercise_id="lunges", target_sets=2, target_reps=10, rest_seconds=60, order_index=3),
            TemplateExercise(exercise_id="plank", target_sets=3, target_reps=30, rest_seconds=60, order_index=4),
        ],
        estimated_duration_minutes=45,
        difficulty=2,
        tags=["beginner", "full-body", "bodyweight"],
        is_custom=False,
        created_at=_CATALOG_EPOCH,
    ),
]


class ReferenceCatalog:
    """Read-only lookup over exercises and prebuilt templates."""

    def __init__(
        self,
        exercises: list[Exercise] | None = None,
        templates: list[WorkoutTemplate] | None = None,
    ):
        self._exercises = {e.id: e for e in (EXERCISES if exercises is None else exercises)}
        self._templates = {t.id: t for t in (TEMPLATES if templates is None else templates)}

    def get_exercise_by_id(self, exercise_id: str) -> Exercise | None:
        return self._exercises.get(exercise_id)

    def list_exercises(self) -> list[Exercise]:
        return list(self._exercises.values())

    def search_exercises(self, query: str) -> list[Exercise]:
        """Case-insensitive match on name, instructions and tips."""
        q = query.strip().lower()
        if not q:
            return self.list_exercises()
        return [
            e
            for e in self._exercises.values()
            if q in e.name.lower()
            or any(q in line.lower() for line in e.instructions)
            or any(q in tip.lower() for tip in e.tips)
        ]

    def get_exercises_by_category(self, category: Cat) -> list[Exercise]:
        return [e for e in self._exercises.values() if e.category == category]

    def get_exercises_by_muscle_group(self, muscle: M) -> list[Exercise]:
        return [
            e
            for e in self._exercises.values()
            if muscle in e.primary_muscles or muscle in e.secondary_muscles
        ]

    def get_exercises_by_equipment(self, equipment: Eq) -> list[Exercise]:
        return [e for e in self._exercises.values() if equipment in e.equipment]

    def get_templates(self) -> list[WorkoutTemplate]:
        return list(self._templates.values())

    def get_template_by_id(self, template_id: str) -> WorkoutTemplate | None:
        return self._templates.get(template_id)
