"""
Travel class enumeration.

One closed set of fare tiers plus the single parser that maps any accepted
display string onto it.
"""

import re
from enum import Enum


class TravelClass(Enum):
    """Enumeration of fare and service tiers, cheapest first."""

    SL = "SL"
    AC3 = "3A"
    AC2 = "2A"
    AC1 = "1A"

    @property
    def code(self) -> str:
        """Short class code (SL, 3A, 2A, 1A)."""
        return self.value

    @property
    def display_name(self) -> str:
        """Get the display name for the class."""
        return _DISPLAY_NAMES[self]

    @property
    def tier(self) -> int:
        """Rank of the class; higher tiers are more expensive."""
        return _TIERS[self]

    def get_label(self) -> str:
        """Get combined label, e.g. "AC 3 Tier (3A)"."""
        return f"{self.display_name} ({self.code})"

    @classmethod
    def ordered(cls) -> list['TravelClass']:
        """All classes from lowest to highest tier."""
        return sorted(cls, key=lambda travel_class: travel_class.tier)

    @classmethod
    def parse(cls, text: 'str | TravelClass') -> 'TravelClass':
        """
        Parse any accepted class string into a TravelClass.

        Accepts codes ("3A"), display names ("AC 3 Tier"), their hyphenated
        variants ("AC 3-Tier") and combined labels ("AC 3 Tier (3A)").

        Args:
            text: Class code, display name or label

        Returns:
            Matching TravelClass

        Raises:
            ValueError: If the text matches no class
        """
        if isinstance(text, cls):
            return text
        if text is None:
            raise ValueError("Invalid class: None")

        cleaned = str(text).strip()

        # A bracketed code wins over whatever label precedes it
        bracketed = re.search(r"\(([^)]+)\)", cleaned)
        if bracketed:
            code = bracketed.group(1).strip().upper()
            if code in _BY_CODE:
                return _BY_CODE[code]

        upper = cleaned.upper()
        if upper in _BY_CODE:
            return _BY_CODE[upper]

        key = _normalize(re.sub(r"\([^)]*\)", "", cleaned))
        if key in _BY_ALIAS:
            return _BY_ALIAS[key]

        raise ValueError(f"Invalid class: {text}")

    def __str__(self) -> str:
        return self.code


def _normalize(text: str) -> str:
    return re.sub(r"[^a-z0-9]", "", text.lower())


_DISPLAY_NAMES = {
    TravelClass.SL: "Sleeper",
    TravelClass.AC3: "AC 3 Tier",
    TravelClass.AC2: "AC 2 Tier",
    TravelClass.AC1: "AC First Class",
}

_TIERS = {
    TravelClass.SL: 1,
    TravelClass.AC3: 2,
    TravelClass.AC2: 3,
    TravelClass.AC1: 4,
}

_BY_CODE = {travel_class.value: travel_class for travel_class in TravelClass}

_BY_ALIAS = {
    _normalize("Sleeper"): TravelClass.SL,
    _normalize("Sleeper Class"): TravelClass.SL,
    _normalize("AC 3 Tier"): TravelClass.AC3,
    _normalize("AC Three Tier"): TravelClass.AC3,
    _normalize("AC 2 Tier"): TravelClass.AC2,
    _normalize("AC Two Tier"): TravelClass.AC2,
    _normalize("AC First Class"): TravelClass.AC1,
    _normalize("AC First"): TravelClass.AC1,
    _normalize("First AC"): TravelClass.AC1,
}
