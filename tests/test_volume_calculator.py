import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import (
    ExerciseType,
    VolumeCalculator,
    calculate_exercise_volume,
    calculate_set_volume,
)
from models import LoggedSet


class SetVolumeTestCase(unittest.TestCase):
    def test_weighted_and_doubled(self) -> None:
        s = LoggedSet(weight=100, reps=5)
        self.assertEqual(calculate_set_volume(s, ExerciseType.WEIGHTED, 80), 500)
        self.assertEqual(calculate_set_volume(s, "doubled", 80), 500)

    def test_bodyweight_ignores_set_weight(self) -> None:
        s = LoggedSet(weight=25, reps=10)
        self.assertEqual(calculate_set_volume(s, "bodyweight", 80), 800)
        self.assertEqual(calculate_set_volume(s, "bodyweight", 0), 0)

    def test_weighted_bodyweight_scenario(self) -> None:
        s = LoggedSet(weight=20, reps=5, completed=True)
        self.assertEqual(calculate_set_volume(s, "weighted-bodyweight", 80), 500)

    def test_assisted_floor(self) -> None:
        s = LoggedSet(weight=90, reps=5)
        self.assertEqual(
            VolumeCalculator.effective_weight(s, "assisted-bodyweight", 80), 0.0
        )
        self.assertEqual(calculate_set_volume(s, "assisted-bodyweight", 80), 0)
        s = LoggedSet(weight=30, reps=5)
        self.assertEqual(calculate_set_volume(s, "assisted-bodyweight", 80), 250)

    def test_unknown_type_defaults_to_weighted(self) -> None:
        s = {"weight": 50, "reps": 4}
        self.assertEqual(calculate_set_volume(s, None, 80), 200)
        self.assertEqual(calculate_set_volume(s, "kettlebell", 80), 200)

    def test_excluded_sets_contribute_zero(self) -> None:
        warmup = {"weight": 60, "reps": 10, "setType": "warmup"}
        skipped = LoggedSet(weight=100, reps=5, completed=False)
        for ex_type in ExerciseType:
            self.assertEqual(calculate_set_volume(warmup, ex_type, 80), 0)
            self.assertEqual(calculate_set_volume(skipped, ex_type, 80), 0)

    def test_failure_sets_count(self) -> None:
        s = LoggedSet(weight=100, reps=3, set_type="failure")
        self.assertEqual(calculate_set_volume(s, "weighted", 80), 300)

    def test_invalid_numbers_are_zeroed(self) -> None:
        self.assertEqual(calculate_set_volume({"weight": float("nan"), "reps": 5}, "weighted", 80), 0)
        self.assertEqual(calculate_set_volume({"weight": 100, "reps": -3}, "weighted", 80), 0)
        self.assertEqual(calculate_set_volume({"weight": 10, "reps": 5}, "bodyweight", -70), 0)

    def test_monotonic_in_weight(self) -> None:
        for ex_type in ("weighted", "doubled", "weighted-bodyweight"):
            prev = -1.0
            for w in range(0, 200, 5):
                vol = calculate_set_volume({"weight": w, "reps": 5}, ex_type, 80)
                self.assertGreaterEqual(vol, prev)
                prev = vol
        prev = float("inf")
        for w in range(0, 200, 5):
            vol = calculate_set_volume({"weight": w, "reps": 5}, "assisted-bodyweight", 80)
            self.assertLessEqual(vol, prev)
            self.assertGreaterEqual(vol, 0)
            prev = vol

    def test_idempotent(self) -> None:
        s = LoggedSet(weight=72.5, reps=7)
        first = calculate_set_volume(s, "weighted-bodyweight", 81.3)
        self.assertEqual(first, calculate_set_volume(s, "weighted-bodyweight", 81.3))


class ExerciseVolumeTestCase(unittest.TestCase):
    def test_empty(self) -> None:
        for ex_type in ExerciseType:
            self.assertEqual(calculate_exercise_volume([], ex_type, 80), 0)

    def test_filters_before_summing(self) -> None:
        sets = [
            LoggedSet(weight=60, reps=10, set_type="warmup"),
            LoggedSet(weight=100, reps=5),
            LoggedSet(weight=100, reps=5, completed=False),
            LoggedSet(weight=110, reps=3, set_type="failure"),
        ]
        self.assertEqual(calculate_exercise_volume(sets, "weighted", 80), 830)

    def test_template_volume_ignores_completion(self) -> None:
        sets = [
            {"weight": 60, "reps": 10, "setType": "warmup"},
            {"weight": 100, "reps": 5, "completed": False},
        ]
        self.assertEqual(VolumeCalculator.calculate_template_volume(sets, "weighted", 80), 500)

    def test_workout_volume_uses_each_exercise_type(self) -> None:
        workout = {
            "exercises": [
                {"type": "weighted", "sets": [{"weight": 100, "reps": 5}]},
                {"type": "bodyweight", "sets": [{"weight": 0, "reps": 10}]},
                {"sets": [{"weight": 20, "reps": 10}]},
            ]
        }
        self.assertEqual(VolumeCalculator.calculate_workout_volume(workout, 70), 500 + 700 + 200)


if __name__ == "__main__":
    unittest.main()
