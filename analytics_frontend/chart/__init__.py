"""Chart package: turns query results into chart configurations and images.

The ChartGenerator inspects the shape of a result and builds a Chart.js
configuration (``type``, ``data``, ``options``) for it:

    1. One dimension: line chart for sequential members (months, days...),
       bar chart otherwise
    2. Two dimensions: grouped bar by default; stacked bar or multi-line on request
    3. Pie chart for one dimension and a single measure
    4. Measures are only combined on one axis when their units match

Main Components:
    - ChartGenerator: shape detection and dataset building
    - ChartConfiguration: colours, borders and label fonts
    - ChartImageRenderer: matplotlib rendering of a Chart to PNG/base64

Usage:
    from analytics_frontend.chart import ChartGenerator, ChartImageRenderer

    chart = ChartGenerator().create_chart(result)
    config = chart.to_dict()          # hand to Chart.js
    image = ChartImageRenderer().render(chart, "revenue")
"""

from __future__ import annotations

from .configuration import (
    ChartArea,
    ChartConfiguration,
    ChartConfigurationFactory,
    ChartLabelFont,
    ColorDispenser,
)
from .generator import ChartGenerator
from .image import ChartImageRenderer
from .model import Chart

__all__ = [
    "Chart",
    "ChartArea",
    "ChartConfiguration",
    "ChartConfigurationFactory",
    "ChartGenerator",
    "ChartImageRenderer",
    "ChartLabelFont",
    "ColorDispenser",
]
