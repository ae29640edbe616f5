import datetime

DAY_ABBREVS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


class WeekTools:
    """Calendar helpers. Day indices run 0 = Sunday .. 6 = Saturday."""

    @staticmethod
    def as_date(value) -> datetime.date:
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, datetime.date):
            return value
        if isinstance(value, str):
            return datetime.date.fromisoformat(value[:10])
        return datetime.datetime.fromtimestamp(
            float(value) / 1000, tz=datetime.timezone.utc
        ).date()

    @staticmethod
    def day_index(value) -> int:
        """Return the Sunday-based day index of ``value``."""
        return WeekTools.as_date(value).isoweekday() % 7

    @classmethod
    def day_index_in_week(cls, value, week_start_day: int = 1) -> int:
        return (cls.day_index(value) - week_start_day) % 7

    @classmethod
    def week_start(cls, value, week_start_day: int = 1) -> datetime.date:
        """Return the first day of the week containing ``value``."""
        day = cls.as_date(value)
        return day - datetime.timedelta(days=cls.day_index_in_week(day, week_start_day))

    @classmethod
    def iso_week_start(cls, value) -> datetime.date:
        """Return the Monday of the ISO week containing ``value``."""
        return cls.week_start(value, 1)

    @classmethod
    def week_range(cls, start) -> tuple[datetime.date, datetime.date]:
        first = cls.as_date(start)
        return first, first + datetime.timedelta(days=6)

    @staticmethod
    def day_name(day: int) -> str:
        return DAY_NAMES[day % 7]

    @staticmethod
    def ordered_day_abbrevs(week_start_day: int = 1) -> list[str]:
        return [DAY_ABBREVS[(week_start_day + i) % 7] for i in range(7)]
