"""Colours and fonts applied to generated chart configurations."""

from __future__ import annotations

import colorsys
from dataclasses import dataclass
from typing import Any

from matplotlib.colors import to_hex

from ..core.config import Settings, get_settings

# Golden-angle hue rotation keeps successive colours far apart
HUE_STEP = 137.5


class ColorDispenser:
    """Hands out a new, well-separated colour on every call."""

    def __init__(
        self,
        hue: float = 240.0,
        saturation: float = 0.4,
        lightness: float = 0.5,
        step: float = HUE_STEP,
    ):
        self._hue = hue
        self.saturation = saturation
        self.lightness = lightness
        self.step = step

    def dispense_color(self) -> str:
        self._hue = (self._hue + self.step) % 360
        rgb = colorsys.hls_to_rgb(self._hue / 360, self.lightness, self.saturation)
        return to_hex(rgb)


@dataclass(frozen=True)
class ChartArea:
    base_color: str
    area_transparency: str = "60"
    border_width: int = 1

    @property
    def area_color(self) -> str:
        # e.g. '#ff0000' + '60' -> '#ff000060'
        return self.base_color + self.area_transparency

    @property
    def border_color(self) -> str:
        return self.base_color

    def to_dict(self) -> dict[str, Any]:
        return {
            "backgroundColor": self.area_color,
            "borderColor": self.border_color,
            "borderWidth": self.border_width,
        }


@dataclass(frozen=True)
class ChartLabelFont:
    size: int = 14
    weight: str = "bold"

    def to_dict(self) -> dict[str, Any]:
        return {"size": self.size, "weight": self.weight}


class ChartConfiguration:
    """Per-chart styling. Each instance owns its own colour sequence."""

    def __init__(
        self,
        area_transparency: str = "60",
        area_border_width: int = 1,
        label_font_size: int = 14,
        label_font_weight: str = "bold",
    ):
        self.area_transparency = area_transparency
        self.area_border_width = area_border_width
        self.label_font_size = label_font_size
        self.label_font_weight = label_font_weight
        self._color_dispenser = ColorDispenser()

    def create_chart_element_configuration(self) -> ChartArea:
        return ChartArea(
            base_color=self._color_dispenser.dispense_color(),
            area_transparency=self.area_transparency,
            border_width=self.area_border_width,
        )

    def chart_label_font(self) -> ChartLabelFont:
        return ChartLabelFont(size=self.label_font_size, weight=self.label_font_weight)


class ChartConfigurationFactory:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def create_chart_configuration(self) -> ChartConfiguration:
        return ChartConfiguration(
            area_transparency=self.settings.area_transparency,
            area_border_width=self.settings.area_border_width,
            label_font_size=self.settings.label_font_size,
            label_font_weight=self.settings.label_font_weight,
        )
