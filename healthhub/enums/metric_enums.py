"""
Metric-related enums for the application.
"""

from enum import Enum


class Unit(str, Enum):
    UNITLESS = "unitless"
    BPM = "bpm"
    KG = "kg"
    ML = "ml"
    ML_KG_MIN = "ml_kg_min"
    MIN = "min"
    SCORE_100 = "score_100"

    @property
    def symbol(self) -> str:
        """Display symbol attached to serialized series."""
        return _UNIT_SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Unit":
        for unit, unit_symbol in _UNIT_SYMBOLS.items():
            if unit_symbol == symbol:
                return unit
        raise ValueError(f"Unknown unit symbol: {symbol!r}")


_UNIT_SYMBOLS = {
    Unit.UNITLESS: "",
    Unit.BPM: "bpm",
    Unit.KG: "kg",
    Unit.ML: "mL",
    Unit.ML_KG_MIN: "mL/kg/min",
    Unit.MIN: "min",
    Unit.SCORE_100: "/100",
}


class SleepStage(str, Enum):
    AWAKE = "awake"
    LIGHT = "light"
    DEEP = "deep"
    REM = "rem"
