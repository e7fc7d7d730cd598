"""Render chart configurations to PNG images with matplotlib."""

from __future__ import annotations

import base64
from io import BytesIO
from pathlib import Path
from typing import Any

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import to_rgba

from ..core.exceptions import UnsupportedData
from ..core.logging_config import get_logger
from .model import TYPE_BAR, TYPE_LINE, TYPE_PIE, Chart

# Use non-interactive backend for server environments
matplotlib.use("Agg")

logger = get_logger(__name__)


class ChartImageRenderer:
    """Draw Chart.js-style configurations as static PNG images."""

    def __init__(self, output_dir: Path | None = None, dpi: int = 100):
        """Initialize image renderer.

        Args:
            output_dir: Optional directory to save chart images. If None, charts are only returned as base64.
            dpi: Resolution for chart images (default: 100)
        """
        self.output_dir = output_dir
        self.dpi = dpi
        if output_dir:
            output_dir.mkdir(parents=True, exist_ok=True)

    def render(self, chart: Chart, filename: str = "chart") -> dict[str, str]:
        """Render a chart to PNG.

        Args:
            chart: Chart configuration from ChartGenerator
            filename: Base filename (without extension)

        Returns:
            Dict with 'path' (if output_dir set) and 'base64' keys

        Raises:
            UnsupportedData: If the chart type cannot be drawn
        """
        labels = [str(label) for label in chart.data.get("labels", [])]
        datasets = chart.data.get("datasets", [])

        if chart.type == TYPE_PIE:
            fig = self._draw_pie(labels, datasets)
        elif chart.type in (TYPE_BAR, TYPE_LINE):
            fig = self._draw_cartesian(chart, labels, datasets)
        else:
            raise UnsupportedData(
                'Cannot draw chart of type "{type}"', type=chart.type
            )

        return self._save_chart(fig, filename)

    def _draw_pie(self, labels: list[str], datasets: list[dict[str, Any]]) -> plt.Figure:
        fig, ax = plt.subplots(figsize=(6, 6))
        if datasets:
            dataset = datasets[0]
            colors = [to_rgba(c) for c in dataset.get("backgroundColor", [])] or None
            ax.pie(dataset.get("data", []), labels=labels, colors=colors, startangle=90)
            ax.set_title(dataset.get("label", ""), fontsize=14, fontweight="bold")
        return fig

    def _draw_cartesian(
        self, chart: Chart, labels: list[str], datasets: list[dict[str, Any]]
    ) -> plt.Figure:
        scales = chart.options.get("scales", {})
        stacked = bool(scales.get("y", {}).get("stacked"))

        fig, ax = plt.subplots(figsize=(max(8, len(labels) * 0.6), 5))
        x = np.arange(len(labels))

        if chart.type == TYPE_LINE:
            for dataset in datasets:
                ax.plot(
                    x,
                    dataset.get("data", []),
                    color=to_rgba(dataset.get("borderColor", "#667eea")),
                    marker="o",
                    linewidth=2,
                    label=dataset.get("label", ""),
                )
        elif stacked:
            bottom = np.zeros(len(labels))
            for dataset in datasets:
                values = np.asarray(dataset.get("data", []), dtype=float)
                ax.bar(
                    x,
                    values,
                    0.6,
                    bottom=bottom,
                    color=to_rgba(dataset.get("backgroundColor", "#667eea")),
                    edgecolor=to_rgba(dataset.get("borderColor", "#667eea")),
                    label=dataset.get("label", ""),
                )
                bottom += values
        else:
            width = 0.8 / max(len(datasets), 1)
            for i, dataset in enumerate(datasets):
                offset = (i - (len(datasets) - 1) / 2) * width
                ax.bar(
                    x + offset,
                    dataset.get("data", []),
                    width,
                    color=to_rgba(dataset.get("backgroundColor", "#667eea")),
                    edgecolor=to_rgba(dataset.get("borderColor", "#667eea")),
                    label=dataset.get("label", ""),
                )

        x_title = scales.get("x", {}).get("title", {})
        y_title = scales.get("y", {}).get("title", {})
        if x_title.get("display"):
            ax.set_xlabel(x_title.get("text", ""), fontsize=11)
        if y_title.get("display"):
            ax.set_ylabel(y_title.get("text", ""), fontsize=11)

        ax.set_xticks(x)
        ax.set_xticklabels(labels, rotation=45, ha="right")
        ax.grid(axis="y", alpha=0.3)

        legend = chart.options.get("plugins", {}).get("legend", {})
        if legend.get("display") and datasets:
            legend_title = legend.get("title", {})
            ax.legend(title=legend_title.get("text") if legend_title.get("display") else None)

        plt.tight_layout()
        return fig

    def _save_chart(self, fig: plt.Figure, filename: str) -> dict[str, str]:
        """Save chart to file and/or encode as base64.

        Args:
            fig: Matplotlib figure to save
            filename: Base filename (without extension)

        Returns:
            Dict with 'path' and/or 'base64' keys
        """
        result = {}

        # Save to file if output_dir is set
        if self.output_dir:
            filepath = self.output_dir / f"{filename}.png"
            try:
                fig.savefig(filepath, dpi=self.dpi, bbox_inches="tight", format="png")
                result["path"] = str(filepath)
                logger.debug(f"Chart saved to {filepath}")
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to save chart to {filepath}: {e}")

        # Always generate base64 for embedding
        try:
            buffer = BytesIO()
            fig.savefig(buffer, dpi=self.dpi, bbox_inches="tight", format="png")
            buffer.seek(0)
            result["base64"] = base64.b64encode(buffer.read()).decode("utf-8")
            buffer.close()
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to generate base64 for chart: {e}")

        plt.close(fig)
        return result
