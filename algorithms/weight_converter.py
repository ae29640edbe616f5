from .math_tools import MathTools


class WeightConverter:
    """Utility for converting between kg and lb.

    Weights are stored in kilograms; pounds only exist at the display edge.
    """

    KG_TO_LB = 2.20462
    LB_TO_KG = 1 / KG_TO_LB
    POUND_UNITS = ("lb", "lbs")

    @staticmethod
    def kg_to_lb(kg: float) -> float:
        return round(MathTools.safe_number(kg) * WeightConverter.KG_TO_LB, 2)

    @staticmethod
    def lb_to_kg(lb: float) -> float:
        return round(MathTools.safe_number(lb) / WeightConverter.KG_TO_LB, 2)

    @classmethod
    def _normalize_unit(cls, unit: str) -> str:
        unit = (unit or "kg").strip().lower()
        if unit in cls.POUND_UNITS:
            return "lbs"
        if unit == "kg":
            return "kg"
        raise ValueError(f"unknown weight unit: {unit}")

    @classmethod
    def convert(cls, weight: float, from_unit: str, to_unit: str) -> float:
        """Convert ``weight`` between units without rounding."""
        weight = MathTools.safe_number(weight)
        src = cls._normalize_unit(from_unit)
        dst = cls._normalize_unit(to_unit)
        if src == dst:
            return weight
        if src == "kg":
            return weight * cls.KG_TO_LB
        return weight * cls.LB_TO_KG

    @classmethod
    def to_display(cls, weight_kg: float, unit: str) -> float:
        return cls.convert(weight_kg, "kg", unit)

    @classmethod
    def to_storage(cls, weight: float, unit: str) -> float:
        return cls.convert(weight, unit, "kg")

    @classmethod
    def format_weight(cls, weight_kg: float, unit: str, decimals: int = 1) -> str:
        """Return ``weight_kg`` formatted in ``unit``, e.g. ``"100.0 kg"``."""
        label = cls._normalize_unit(unit)
        return f"{cls.to_display(weight_kg, label):.{decimals}f} {label}"

    @classmethod
    def format_volume(cls, volume_kg: float, unit: str) -> str:
        label = cls._normalize_unit(unit)
        return f"{round(cls.to_display(volume_kg, label))} {label}"
