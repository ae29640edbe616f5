import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import MuscleContribution
from models import CompletedExercise


class DefaultContributionTestCase(unittest.TestCase):
    def test_primary_only(self) -> None:
        self.assertEqual(MuscleContribution.default_contributions("chest"), {"chest": 100.0})
        self.assertEqual(MuscleContribution.default_contributions("chest", []), {"chest": 100.0})

    def test_secondary_split(self) -> None:
        self.assertEqual(
            MuscleContribution.default_contributions("quadriceps", ["gluteal", "hamstring"]),
            {"quadriceps": 70.0, "gluteal": 15.0, "hamstring": 15.0},
        )
        three = MuscleContribution.default_contributions("lats", ["biceps", "upper-back", "forearm"])
        self.assertTrue(MuscleContribution.validate_contributions(three))

    def test_validate_contributions(self) -> None:
        self.assertTrue(MuscleContribution.validate_contributions({"chest": 70, "triceps": 30}))
        self.assertFalse(MuscleContribution.validate_contributions({"chest": 70}))
        self.assertTrue(
            MuscleContribution.validate_contributions({"chest": 100, "triceps": 30}, ["chest"])
        )
        self.assertFalse(MuscleContribution.validate_contributions({}))


class WeightedShareTestCase(unittest.TestCase):
    def test_weighted_volume(self) -> None:
        self.assertEqual(
            MuscleContribution.weighted_volume(1000, {"chest": 70, "triceps": 30}),
            {"chest": 700, "triceps": 300},
        )
        self.assertEqual(MuscleContribution.weighted_volume(float("nan"), {"chest": 100}), {"chest": 0})

    def test_weighted_sets(self) -> None:
        sets = MuscleContribution.weighted_sets(3, {"chest": 70, "triceps": 30}, "chest")
        self.assertEqual(sets["chest"], 3)
        self.assertAlmostEqual(sets["triceps"], 0.9)

    def test_exercise_contributions(self) -> None:
        self.assertIsNone(MuscleContribution.exercise_contributions({"name": "Mystery"}))
        saved = CompletedExercise.model_validate(
            {"primaryMuscle": "lats", "muscleContributions": {"lats": 60, "biceps": 40}}
        )
        self.assertEqual(
            MuscleContribution.exercise_contributions(saved), {"lats": 60, "biceps": 40}
        )
        defaults = {"primaryMuscle": "chest", "secondaryMuscles": ["triceps"]}
        self.assertEqual(
            MuscleContribution.exercise_contributions(defaults), {"chest": 70, "triceps": 30}
        )

    def test_aggregate_muscle_data(self) -> None:
        result = MuscleContribution.aggregate_muscle_data(
            [
                {"contributions": {"chest": 100}, "primary_muscle": "chest", "volume": 500, "sets": 2},
                {
                    "contributions": {"chest": 70, "triceps": 30},
                    "primaryMuscle": "chest",
                    "volume": 1000,
                    "sets": 3,
                },
            ]
        )
        self.assertEqual(result["volume_per_muscle"], {"chest": 1200, "triceps": 300})
        self.assertEqual(result["sets_per_muscle"]["chest"], 5)
        self.assertAlmostEqual(result["sets_per_muscle"]["triceps"], 0.9)
        self.assertEqual(
            MuscleContribution.aggregate_muscle_data([]),
            {"volume_per_muscle": {}, "sets_per_muscle": {}},
        )


if __name__ == "__main__":
    unittest.main()
