"""Built-in gradient themes."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Sequence

from .errors import UnknownTheme
from .gradient import GradientTable

DEFAULT_THEME_NAME = "mono"

# Gradients from https://uigradients.com
THEME_STOPS: Mapping[str, Sequence[tuple[str, float]]] = MappingProxyType(
    {
        "scooter": (("#36d1dc", 0.0), ("#5b86e5", 1.0)),
        "visionsOfGrandeur": (("#000046", 0.0), ("#1CB5E0", 1.0)),
        "blueSkies": (("#56CCF2", 0.0), ("#2F80ED", 1.0)),
        "darkOcean": (("#373B44", 0.0), ("#4286f4", 1.0)),
        "yoda": (("#FF0099", 0.0), ("#493240", 1.0)),
        "amin": (("#8E2DE2", 0.0), ("#4A00E0", 1.0)),
        "harvey": (("#1f4037", 0.0), ("#99f2c8", 1.0)),
        "flare": (("#f12711", 0.0), ("#f5af19", 1.0)),
        "ultraViolet": (("#654ea3", 0.0), ("#eaafc8", 1.0)),
        "sinCityRed": (("#ED213A", 0.0), ("#93291E", 1.0)),
        "eveningNight": (("#005AA7", 0.0), ("#FFFDE4", 1.0)),
        "eXpresso": (("#3c1053", 0.0), ("#ad5389", 1.0)),
        "mono": (("#000000", 0.0), ("#ffffff", 1.0)),
        "black": (("#000000", 0.0), ("#000000", 1.0)),
        "white": (("#ffffff", 0.0), ("#ffffff", 1.0)),
        "coolSky": (("#2980B9", 0.0), ("#6DD5FA", 0.5), ("#FFFFFF", 1.0)),
        "moonlitAsteroid": (("#0f2027", 0.0), ("#203a43", 0.5), ("#2c5364", 1.0)),
        "jShine": (("#12c2e9", 0.0), ("#c471ed", 0.5), ("#f64f59", 1.0)),
    }
)


class ThemeRegistry:
    """Read-only mapping of theme name to gradient table."""

    def __init__(self, stops: Mapping[str, Sequence[tuple[str, float]]]) -> None:
        self._tables = MappingProxyType({name: GradientTable(pts) for name, pts in stops.items()})

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def names(self) -> list[str]:
        return sorted(self._tables.keys())

    def get(self, name: str | None) -> GradientTable:
        if not name:
            name = DEFAULT_THEME_NAME
        try:
            return self._tables[name]
        except KeyError:
            raise UnknownTheme(name, self.names()) from None


def default_registry() -> ThemeRegistry:
    return ThemeRegistry(THEME_STOPS)


def list_themes() -> list[str]:
    return sorted(THEME_STOPS.keys())
