import argparse
import json
import logging

from algorithms import TrendTools, WeightConverter
from config import YamlConfig
from stats_service import StatisticsService


def load_history(path: str) -> list:
    """Read workouts from a JSON backup (a list or ``{"workouts": [...]}``)."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("workouts", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a workout list")
    return data


def build_service(history_path: str, body_weight: float | None, settings_path: str | None) -> StatisticsService:
    settings = YamlConfig(settings_path).load_settings()
    return StatisticsService(load_history(history_path), body_weight, settings)


def convert_weight(weight: float, unit: str) -> str:
    if unit == "kg":
        return f"{weight} kg = {WeightConverter.kg_to_lb(weight)} lb"
    return f"{weight} lb = {WeightConverter.lb_to_kg(weight)} kg"


def volume_report(service: StatisticsService, exercise: str, mode: str) -> str:
    return json.dumps(service.session_series(exercise, mode), indent=2, ensure_ascii=False)


def repmax_report(service: StatisticsService, exercise: str) -> str:
    report = {
        "estimates": service.rep_max_curve(exercise),
        "failure_sets": service.failure_points(exercise),
    }
    return json.dumps(report, indent=2)


def trend_report(service: StatisticsService, exercise: str, mode: str) -> str:
    chart = service.progression_chart(exercise, mode)
    trend = chart["trend"]
    if trend is None:
        return "Not enough sessions for a trend"
    unit = service.settings.weight_unit
    rate = WeightConverter.to_display(abs(trend["rate_per_unit"]), unit)
    if trend["rate_per_unit"] < 0:
        rate = -rate
    label = TrendTools.format_trend_rate(rate, unit, "session")
    return f"{exercise} ({mode}): {trend['trend']}, {label}, r²={trend['r_squared']:.2f}"


def muscle_report(service: StatisticsService, start: str | None, end: str | None) -> str:
    return json.dumps(service.muscle_stats(start, end), indent=2)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Workout analytics commands")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    conv = sub.add_parser("convert")
    conv.add_argument("--weight", type=float, required=True)
    conv.add_argument("--unit", choices=["kg", "lb"], required=True)

    for name in ("volume", "repmax", "trend"):
        cmd = sub.add_parser(name)
        cmd.add_argument("--file", required=True)
        cmd.add_argument("--exercise", required=True)
        cmd.add_argument("--bw", type=float, default=None)
        cmd.add_argument("--settings", default=None)
        if name != "repmax":
            cmd.add_argument("--mode", choices=StatisticsService.MODES, default="best_set")

    muscles = sub.add_parser("muscles")
    muscles.add_argument("--file", required=True)
    muscles.add_argument("--from", dest="start", default=None)
    muscles.add_argument("--to", dest="end", default=None)
    muscles.add_argument("--bw", type=float, default=None)
    muscles.add_argument("--settings", default=None)

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.cmd == "convert":
        print(convert_weight(args.weight, args.unit))
        return
    service = build_service(args.file, args.bw, args.settings)
    if args.cmd == "volume":
        print(volume_report(service, args.exercise, args.mode))
    elif args.cmd == "repmax":
        print(repmax_report(service, args.exercise))
    elif args.cmd == "trend":
        print(trend_report(service, args.exercise, args.mode))
    elif args.cmd == "muscles":
        print(muscle_report(service, args.start, args.end))


if __name__ == "__main__":
    main()
