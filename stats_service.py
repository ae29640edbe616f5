from __future__ import annotations

import datetime
import logging
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError

from algorithms import (
    ExerciseType,
    MathTools,
    MuscleContribution,
    RepMaxEstimator,
    SetType,
    TrendTools,
    VolumeCalculator,
    WeekTools,
    is_weighted,
    resolve_exercise_type,
)
from models import CompletedWorkout, RepMaxInput
from settings_schema import SettingsSchema

logger = logging.getLogger(__name__)


class StatisticsService:
    """Compute chart-ready workout statistics from an in-memory history.

    The service owns the workout collection it was built with; every method
    is a pure function of that collection, the body weight and the settings.
    """

    MODES = (
        "best_set",
        "avg_set",
        "total_volume",
        "heaviest_weight",
        "weekly_volume",
        "estimated_1rm",
    )
    PERIOD_SESSIONS: Dict[str, Optional[int]] = {
        "week": 5,
        "month": 10,
        "6months": 25,
        "all": None,
    }

    def __init__(
        self,
        workouts: Iterable,
        body_weight_kg: float | None = None,
        settings: SettingsSchema | None = None,
    ) -> None:
        self.settings = settings or SettingsSchema()
        if body_weight_kg is None:
            body_weight_kg = self.settings.body_weight
        self.body_weight = MathTools.safe_number(body_weight_kg)
        self.workouts = self._load_workouts(workouts)

    @staticmethod
    def _load_workouts(workouts: Iterable) -> List[CompletedWorkout]:
        loaded: List[CompletedWorkout] = []
        for idx, item in enumerate(workouts or []):
            if isinstance(item, CompletedWorkout):
                loaded.append(item)
                continue
            try:
                loaded.append(CompletedWorkout.model_validate(item))
            except ValidationError as e:
                logger.warning("skipping malformed workout #%d: %s", idx, e)
        return sorted(loaded, key=lambda w: w.session_timestamp)

    @staticmethod
    def _ms(day: datetime.date) -> float:
        dt = datetime.datetime(day.year, day.month, day.day, tzinfo=datetime.timezone.utc)
        return dt.timestamp() * 1000

    @staticmethod
    def _label(weight: float, reps: float) -> str:
        return f"{round(weight, 1):g} × {round(reps, 1):g}"

    def _effective(self, entry: dict) -> float:
        return VolumeCalculator.effective_weight(entry["set"], entry["type"], self.body_weight)

    def _volume(self, entry: dict) -> float:
        return VolumeCalculator.calculate_set_volume(entry["set"], entry["type"], self.body_weight)

    def exercise_sets(
        self,
        exercise: str,
        exercise_type=None,
        workouts: Optional[List[CompletedWorkout]] = None,
    ) -> List[dict]:
        """Return qualifying sets of ``exercise`` with their resolved type.

        ``exercise`` matches a logged exercise's name or catalog id. The type
        logged with the exercise wins over ``exercise_type``.
        """
        entries: List[dict] = []
        for workout in self.workouts if workouts is None else workouts:
            for ex in workout.exercises:
                if not ex.matches(exercise):
                    continue
                ex_type = resolve_exercise_type(ex.type, exercise_type)
                for logged_set in ex.sets:
                    if not logged_set.is_qualifying or logged_set.reps <= 0:
                        continue
                    entries.append(
                        {
                            "set": logged_set,
                            "type": ex_type,
                            "date": workout.session_date.isoformat(),
                            "timestamp": workout.session_timestamp,
                            "workout_id": workout.id,
                        }
                    )
        return entries

    def _sessions(self, entries: List[dict]) -> Dict[str, List[dict]]:
        sessions: Dict[str, List[dict]] = {}
        for entry in entries:
            sessions.setdefault(entry["date"], []).append(entry)
        return sessions

    def _best_set_point(self, date: str, entries: List[dict]) -> dict:
        best = max(
            entries,
            key=lambda e: (self._volume(e), self._effective(e), e["set"].reps),
        )
        weight = self._effective(best)
        return {
            "date": date,
            "value": round(self._volume(best), 2),
            "timestamp": entries[0]["timestamp"],
            "weight": weight,
            "reps": best["set"].reps,
            "sets": len(entries),
            "tooltip": self._label(weight, best["set"].reps),
        }

    def _avg_set_point(self, date: str, entries: List[dict]) -> dict:
        avg_weight = MathTools.mean(self._effective(e) for e in entries)
        avg_reps = MathTools.mean(e["set"].reps for e in entries)
        return {
            "date": date,
            "value": round(avg_weight * avg_reps, 2),
            "timestamp": entries[0]["timestamp"],
            "weight": round(avg_weight, 1),
            "reps": round(avg_reps, 1),
            "sets": len(entries),
            "tooltip": self._label(avg_weight, avg_reps),
        }

    def _total_volume_point(self, date: str, entries: List[dict]) -> dict:
        total_reps = sum(e["set"].reps for e in entries)
        return {
            "date": date,
            "value": round(sum(self._volume(e) for e in entries), 2),
            "timestamp": entries[0]["timestamp"],
            "weight": None,
            "reps": total_reps,
            "sets": len(entries),
            "tooltip": f"{len(entries)} sets • {total_reps} reps",
        }

    def _heaviest_weight_point(self, date: str, entries: List[dict]) -> dict:
        best = max(entries, key=lambda e: (self._effective(e), e["set"].reps))
        weight = self._effective(best)
        return {
            "date": date,
            "value": round(weight, 2),
            "timestamp": entries[0]["timestamp"],
            "weight": weight,
            "reps": best["set"].reps,
            "sets": len(entries),
            "tooltip": self._label(weight, best["set"].reps),
        }

    def _estimated_1rm_point(self, date: str, entries: List[dict]) -> Optional[dict]:
        scored = [
            (MathTools.epley_1rm(self._effective(e), e["set"].reps), self._effective(e), e)
            for e in entries
        ]
        scored = [s for s in scored if s[0] > 0]
        if not scored:
            return None
        est, weight, best = max(scored, key=lambda s: (s[0], s[1]))
        return {
            "date": date,
            "value": round(est, 2),
            "timestamp": entries[0]["timestamp"],
            "weight": weight,
            "reps": best["set"].reps,
            "sets": len(entries),
            "tooltip": f"Est 1RM: {round(est, 1):g}",
        }

    def _weekly_volume_points(self, entries: List[dict]) -> List[dict]:
        weeks: Dict[datetime.date, List[dict]] = {}
        for entry in entries:
            monday = WeekTools.iso_week_start(entry["date"])
            weeks.setdefault(monday, []).append(entry)
        result = []
        for monday in sorted(weeks):
            items = weeks[monday]
            total_reps = sum(e["set"].reps for e in items)
            result.append(
                {
                    "date": monday.isoformat(),
                    "value": round(sum(self._volume(e) for e in items), 2),
                    "timestamp": self._ms(monday),
                    "weight": None,
                    "reps": total_reps,
                    "sets": len(items),
                    "tooltip": f"{len(items)} sets • {total_reps} reps",
                }
            )
        return result

    def session_series(
        self,
        exercise: str,
        mode: str = "best_set",
        exercise_type=None,
    ) -> List[dict]:
        """Return one chart point per session (or ISO week) for ``mode``."""
        if mode not in self.MODES:
            raise ValueError(f"unknown aggregation mode: {mode}")
        entries = self.exercise_sets(exercise, exercise_type)
        if mode == "weekly_volume":
            return self._weekly_volume_points(entries)
        reducer = {
            "best_set": self._best_set_point,
            "avg_set": self._avg_set_point,
            "total_volume": self._total_volume_point,
            "heaviest_weight": self._heaviest_weight_point,
            "estimated_1rm": self._estimated_1rm_point,
        }[mode]
        points = []
        for date, items in self._sessions(entries).items():
            point = reducer(date, items)
            if point is not None:
                points.append(point)
        return sorted(points, key=lambda p: (p["timestamp"], p["date"]))

    def exercise_summary(self, exercise: str, exercise_type=None) -> Dict[str, object]:
        """Return all-time bests, totals and the top sets of ``exercise``."""
        entries = self.exercise_sets(exercise, exercise_type)
        empty_set = {"weight": 0.0, "reps": 0}
        if not entries:
            return {
                "heaviest_weight": 0.0,
                "estimated_1rm": 0.0,
                "best_set_by_weight": dict(empty_set),
                "best_set_by_volume": {**empty_set, "volume": 0.0},
                "best_set_by_reps": dict(empty_set),
                "total_volume": 0.0,
                "total_sets": 0,
                "top_sets": [],
            }

        rows = [
            {
                "weight": self._effective(e),
                "reps": e["set"].reps,
                "volume": self._volume(e),
                "timestamp": e["set"].timestamp or e["timestamp"],
                "weighted": is_weighted(e["type"]),
            }
            for e in entries
        ]
        by_weight = max(rows, key=lambda r: (r["weight"], r["reps"]))
        by_volume = max(rows, key=lambda r: (r["volume"], r["weight"]))
        by_reps = max(rows, key=lambda r: (r["reps"], r["weight"]))
        est = max(
            (MathTools.epley_1rm(r["weight"], r["reps"]) for r in rows if r["weighted"]),
            default=0.0,
        )
        top = sorted(rows, key=lambda r: (-r["weight"], -r["reps"]))
        top = top[: self.settings.top_sets_limit]
        return {
            "heaviest_weight": by_weight["weight"],
            "estimated_1rm": est,
            "best_set_by_weight": {"weight": by_weight["weight"], "reps": by_weight["reps"]},
            "best_set_by_volume": {
                "weight": by_volume["weight"],
                "reps": by_volume["reps"],
                "volume": by_volume["volume"],
            },
            "best_set_by_reps": {"weight": by_reps["weight"], "reps": by_reps["reps"]},
            "total_volume": round(sum(r["volume"] for r in rows), 2),
            "total_sets": len(rows),
            "top_sets": [
                {"weight": r["weight"], "reps": r["reps"], "timestamp": r["timestamp"]}
                for r in top
            ],
        }

    def rep_max_curve(
        self,
        exercise: str,
        exercise_type=None,
        manual_overrides: Optional[Dict[int, float]] = None,
        now_ms: float | None = None,
    ) -> List[dict]:
        """Return the estimated rep-max curve for ``exercise``."""
        summary = self.exercise_summary(exercise, exercise_type)
        best = summary["best_set_by_weight"]
        if not summary["estimated_1rm"] or not best["weight"] or not best["reps"]:
            return []
        rep_input = RepMaxInput(
            one_rep_max=summary["estimated_1rm"],
            best_set_weight=best["weight"],
            best_set_reps=best["reps"],
            top_sets=summary["top_sets"],
        )
        return RepMaxEstimator.calculate_rep_max_estimates(
            rep_input,
            target_reps=self.settings.rep_max_targets,
            manual_overrides=manual_overrides,
            now_ms=now_ms,
        )

    def failure_points(self, exercise: str, exercise_type=None) -> List[dict]:
        """Return failure-logged sets of ``exercise`` as chart markers."""
        points = [
            {
                "weight": self._effective(e),
                "reps": e["set"].reps,
                "timestamp": e["set"].timestamp or e["timestamp"],
            }
            for e in self.exercise_sets(exercise, exercise_type)
            if e["set"].set_type is SetType.FAILURE
        ]
        return RepMaxEstimator.failure_overlay(points)

    def progression_chart(
        self,
        exercise: str,
        mode: str = "best_set",
        period: str = "all",
        exercise_type=None,
    ) -> Dict[str, object]:
        """Return the recent series with its rolling average and trendline."""
        if period not in self.PERIOD_SESSIONS:
            raise ValueError(f"unknown period: {period}")
        series = self.session_series(exercise, mode, exercise_type)
        count = self.PERIOD_SESSIONS[period]
        if count is not None:
            series = series[-count:]
        window = (
            self.settings.weekly_rolling_window
            if mode == "weekly_volume"
            else self.settings.session_rolling_window
        )
        rolling = TrendTools.calculate_rolling_average(series, window)
        regression = TrendTools.calculate_linear_regression(
            [{"x": idx, "y": p["value"]} for idx, p in enumerate(series)],
            threshold=self.settings.trend_threshold,
        )
        return {
            "mode": mode,
            "points": series,
            "rolling_average": [{"x": idx, "y": p["value"]} for idx, p in enumerate(rolling)],
            "trend": regression,
        }

    def detect_workout_prs(self, workout) -> List[Dict[str, object]]:
        """Return heaviest-weight and set-volume records set in ``workout``."""
        if not isinstance(workout, CompletedWorkout):
            workout = CompletedWorkout.model_validate(workout)
        if workout.id:
            history = [w for w in self.workouts if w.id != workout.id]
        else:
            history = [w for w in self.workouts if w is not workout and w != workout]
        prs: List[Dict[str, object]] = []
        for ex in workout.exercises:
            ex_type = resolve_exercise_type(ex.type)
            done = [s for s in ex.sets if s.is_qualifying and s.reps > 0]
            if not done:
                continue
            weights = [VolumeCalculator.effective_weight(s, ex_type, self.body_weight) for s in done]
            volumes = [
                VolumeCalculator.calculate_set_volume(s, ex_type, self.body_weight) for s in done
            ]
            past = self.exercise_sets(ex.name, ex_type, workouts=history)
            if not past:
                if max(weights) > 0 or ex_type is ExerciseType.BODYWEIGHT:
                    prs.append({"exercise": ex.name, "pr_type": "heaviest_weight", "value": max(weights)})
                    prs.append({"exercise": ex.name, "pr_type": "highest_volume", "value": max(volumes)})
                continue
            past_weight = max(self._effective(e) for e in past)
            past_volume = max(self._volume(e) for e in past)
            if max(weights) > past_weight:
                prs.append({"exercise": ex.name, "pr_type": "heaviest_weight", "value": max(weights)})
            if max(volumes) > past_volume:
                prs.append({"exercise": ex.name, "pr_type": "highest_volume", "value": max(volumes)})
        return prs

    def week_stats(
        self,
        exercise: str,
        reference: datetime.date | str | None = None,
        week_start_day: int | None = None,
        exercise_type=None,
    ) -> Dict[str, object]:
        """Return this week's totals using the user's week-start preference."""
        if week_start_day is None:
            week_start_day = self.settings.week_start_day
        if reference is None:
            reference = datetime.datetime.now(datetime.timezone.utc).date()
        start, end = WeekTools.week_range(WeekTools.week_start(reference, week_start_day))
        entries = [
            e
            for e in self.exercise_sets(exercise, exercise_type)
            if start.isoformat() <= e["date"] <= end.isoformat()
        ]
        heaviest = max((self._effective(e) for e in entries), default=0.0)
        best = (
            max(entries, key=lambda e: (self._volume(e), self._effective(e)))
            if entries
            else None
        )
        return {
            "week_start": start.isoformat(),
            "total_sets": len(entries),
            "total_volume": round(sum(self._volume(e) for e in entries), 2),
            "heaviest_weight": heaviest,
            "best_set_by_volume": (
                {
                    "weight": self._effective(best),
                    "reps": best["set"].reps,
                    "volume": self._volume(best),
                }
                if best
                else {"weight": 0.0, "reps": 0, "volume": 0.0}
            ),
        }

    def muscle_stats(
        self,
        start: datetime.date | str | None = None,
        end: datetime.date | str | None = None,
    ) -> Dict[str, object]:
        """Return contribution-weighted volume and sets per muscle group.

        Only sessions between ``start`` and ``end`` (inclusive) count.
        Exercises without a primary muscle add to the totals only.
        """
        first = WeekTools.as_date(start).isoformat() if start is not None else None
        last = WeekTools.as_date(end).isoformat() if end is not None else None
        exercise_data = []
        total_volume = 0.0
        total_sets = 0
        for workout in self.workouts:
            day = workout.session_date.isoformat()
            if (first and day < first) or (last and day > last):
                continue
            for ex in workout.exercises:
                ex_type = resolve_exercise_type(ex.type)
                done = VolumeCalculator.qualifying_sets(ex.sets)
                volume = VolumeCalculator.calculate_exercise_volume(done, ex_type, self.body_weight)
                total_volume += volume
                total_sets += len(done)
                contributions = MuscleContribution.exercise_contributions(ex)
                if contributions is None or not done:
                    continue
                exercise_data.append(
                    {
                        "contributions": contributions,
                        "primary_muscle": ex.primary_muscle,
                        "volume": volume,
                        "sets": len(done),
                    }
                )
        result = MuscleContribution.aggregate_muscle_data(exercise_data)
        return {
            "volume_per_muscle": {m: round(v, 2) for m, v in result["volume_per_muscle"].items()},
            "sets_per_muscle": {m: round(s, 2) for m, s in result["sets_per_muscle"].items()},
            "total_volume": round(total_volume, 2),
            "total_sets": total_sets,
        }

    def workout_stats(self) -> Dict[str, float]:
        total_volume = sum(
            VolumeCalculator.calculate_workout_volume(w, self.body_weight) for w in self.workouts
        )
        durations = [w.duration_ms for w in self.workouts]
        return {
            "total_workouts": len(self.workouts),
            "total_volume": round(total_volume, 2),
            "total_exercises": sum(len(w.exercises) for w in self.workouts),
            "avg_duration_ms": round(MathTools.mean(durations)) if durations else 0,
        }
