import datetime
import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import ExerciseType, SetType
from models import CompletedExercise, CompletedWorkout, LoggedSet, RepMaxInput


class LoggedSetTestCase(unittest.TestCase):
    def test_camel_case_backup_keys(self) -> None:
        s = LoggedSet.model_validate(
            {"setNumber": 2, "reps": 8, "weight": 60, "unit": "LB", "setType": "Failure"}
        )
        self.assertEqual(s.set_number, 2)
        self.assertEqual(s.unit, "lbs")
        self.assertIs(s.set_type, SetType.FAILURE)
        self.assertTrue(s.completed)
        self.assertTrue(s.is_qualifying)

    def test_bad_values_are_coerced(self) -> None:
        s = LoggedSet.model_validate(
            {"reps": -3, "weight": "heavy", "setType": "drop", "completed": None, "unit": None}
        )
        self.assertEqual(s.reps, 0)
        self.assertEqual(s.weight, 0.0)
        self.assertIs(s.set_type, SetType.WORKING)
        self.assertTrue(s.completed)
        self.assertEqual(s.unit, "kg")

    def test_not_qualifying(self) -> None:
        self.assertFalse(LoggedSet(completed=False, reps=5, weight=50).is_qualifying)
        self.assertFalse(LoggedSet(set_type="warmup", reps=5, weight=50).is_qualifying)


class CompletedWorkoutTestCase(unittest.TestCase):
    def test_nested_parsing(self) -> None:
        start = datetime.datetime(2024, 3, 5, 23, 0, tzinfo=datetime.timezone.utc).timestamp() * 1000
        workout = CompletedWorkout.model_validate(
            {
                "id": 7,
                "name": "Push",
                "startTime": start,
                "endTime": start + 5_400_000,
                "exercises": [
                    {
                        "id": "e1",
                        "exerciseId": "bench",
                        "name": "Bench Press",
                        "type": "Weighted",
                        "sets": [{"reps": 5, "weight": 100}],
                    },
                    {"name": "Dips", "type": "unknown"},
                ],
                "notes": "ignored",
            }
        )
        self.assertEqual(workout.id, "7")
        self.assertEqual(workout.duration_ms, 5_400_000)
        self.assertEqual(workout.session_date, datetime.date(2024, 3, 6))
        bench, dips = workout.exercises
        self.assertIs(bench.type, ExerciseType.WEIGHTED)
        self.assertIsNone(dips.type)
        self.assertTrue(bench.matches("Bench Press"))
        self.assertTrue(bench.matches("bench"))
        self.assertFalse(bench.matches(""))
        self.assertEqual(dips.sets, [])

    def test_session_timestamp_falls_back_to_start(self) -> None:
        workout = CompletedWorkout(start_time=1000)
        self.assertEqual(workout.session_timestamp, 1000)
        self.assertEqual(workout.duration_ms, 0.0)

    def test_exercise_defaults(self) -> None:
        ex = CompletedExercise(name=None)
        self.assertEqual(ex.name, "")
        self.assertIsNone(ex.exercise_id)


class RepMaxInputTestCase(unittest.TestCase):
    def test_aliases(self) -> None:
        data = RepMaxInput.model_validate(
            {
                "oneRepMax": "120",
                "bestSetWeight": 100,
                "bestSetReps": 6.0,
                "topSets": [{"weight": 100, "reps": 6, "timestamp": None}],
            }
        )
        self.assertEqual(data.one_rep_max, 120.0)
        self.assertEqual(data.best_set_reps, 6)
        self.assertEqual(data.top_sets[0].timestamp, 0.0)


if __name__ == "__main__":
    unittest.main()
