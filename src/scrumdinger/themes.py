"""Meeting color themes."""

from __future__ import annotations

from enum import Enum

BLACK = "#000000"
WHITE = "#ffffff"


class Theme(Enum):
    BUBBLEGUM = "bubblegum"
    BUTTERCUP = "buttercup"
    INDIGO = "indigo"
    LAVENDER = "lavender"
    MAGENTA = "magenta"
    NAVY = "navy"
    ORANGE = "orange"
    OXBLOOD = "oxblood"
    PERIWINKLE = "periwinkle"
    POPPY = "poppy"
    PURPLE = "purple"
    SEAFOAM = "seafoam"
    SKY = "sky"
    TAN = "tan"
    TEAL = "teal"
    YELLOW = "yellow"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def main_color(self) -> str:
        return _MAIN_COLORS[self]

    @property
    def accent_color(self) -> str:
        return WHITE if self in _DARK_THEMES else BLACK

    @classmethod
    def parse(cls, value: "str | Theme") -> "Theme":
        if isinstance(value, Theme):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown theme: {value!r}") from None


_MAIN_COLORS = {
    Theme.BUBBLEGUM: "#f2a6c9",
    Theme.BUTTERCUP: "#fbe39a",
    Theme.INDIGO: "#3a1f8f",
    Theme.LAVENDER: "#cfc4f5",
    Theme.MAGENTA: "#a4157a",
    Theme.NAVY: "#142a54",
    Theme.ORANGE: "#f5a25d",
    Theme.OXBLOOD: "#4a0f14",
    Theme.PERIWINKLE: "#8d9bf0",
    Theme.POPPY: "#f56b5b",
    Theme.PURPLE: "#8a2fc2",
    Theme.SEAFOAM: "#c6efe2",
    Theme.SKY: "#6fb8f2",
    Theme.TAN: "#c7a27f",
    Theme.TEAL: "#2f9aa0",
    Theme.YELLOW: "#f7d046",
}

_DARK_THEMES = frozenset(
    {Theme.INDIGO, Theme.MAGENTA, Theme.NAVY, Theme.OXBLOOD, Theme.PURPLE}
)
