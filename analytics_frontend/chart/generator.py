"""Chart generation from query results.

Inspects the shape of a result (number of dimensions, measure units) to pick
a chart type and builds the Chart.js ``data``/``options`` structures for it.
"""

from __future__ import annotations

from typing import Any

from ..core.config import Settings, get_settings
from ..core.enums import ChartType
from ..core.exceptions import EmptyResult, HierarchicalOrderingRequired, UnsupportedData
from ..core.logging_config import get_logger
from ..formatter.factory import Formatters, create_formatters
from ..result.model import Measures, Result, SequenceMember
from .configuration import ChartConfiguration, ChartConfigurationFactory
from .model import TYPE_BAR, TYPE_LINE, TYPE_PIE, Chart

logger = get_logger(__name__)

# Variants of the two-dimension chart
GROUPED_BAR = "groupedBar"
STACKED_BAR = "stackedBar"
MULTI_LINE = "multiLine"


class ChartGenerator:
    """Build Chart.js configurations from results."""

    def __init__(
        self,
        formatters: Formatters | None = None,
        configuration_factory: ChartConfigurationFactory | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.formatters = formatters or create_formatters(self.settings)
        self.configuration_factory = configuration_factory or ChartConfigurationFactory(
            self.settings
        )

    def create_chart(
        self, result: Result, chart_type: ChartType | str = ChartType.AUTO
    ) -> Chart:
        """Create a chart for a result.

        Args:
            result: Query result to visualize
            chart_type: Requested chart type; AUTO picks one from the result shape

        Returns:
            Chart configuration

        Raises:
            UnsupportedData: If the result shape cannot be drawn as the requested chart
        """
        try:
            chart_type = ChartType(chart_type)
        except ValueError:
            raise UnsupportedData(
                'Unsupported chart type "{type}"', type=chart_type
            ) from None

        try:
            if chart_type is ChartType.AUTO:
                chart = self._create_auto_chart(result)
            elif chart_type is ChartType.BAR:
                chart = self._create_bar_or_line_chart(result, TYPE_BAR)
            elif chart_type is ChartType.LINE:
                chart = self._create_line_chart(result)
            elif chart_type is ChartType.STACKED_BAR:
                chart = self._create_grouped_bar_chart(result, STACKED_BAR)
            elif chart_type is ChartType.GROUPED_BAR:
                chart = self._create_grouped_bar_chart(result, GROUPED_BAR)
            elif chart_type is ChartType.PIE:
                chart = self._create_pie_chart(result)
            else:
                raise UnsupportedData("Unsupported chart type")
        except EmptyResult as e:
            raise UnsupportedData("Result is empty") from e
        except HierarchicalOrderingRequired as e:
            raise UnsupportedData(
                "Rows must be grouped by the first dimension to draw this chart"
            ) from e

        logger.debug(
            "Chart created",
            extra={
                "requested_type": chart_type.value,
                "chart_type": chart.type,
                "datasets": len(chart.data.get("datasets", [])),
                "labels": len(chart.data.get("labels", [])),
            },
        )
        return chart

    def _create_auto_chart(self, result: Result) -> Chart:
        num_dimensions = len(result.table.row_prototype)

        if num_dimensions == 1:
            if self._is_first_dimension_sequential(result):
                return self._create_line_chart(result)
            return self._create_bar_or_line_chart(result, TYPE_BAR)
        if num_dimensions == 2:
            # TODO: choose between grouped bar and multi-line from the member types
            return self._create_grouped_bar_chart(result, GROUPED_BAR)

        raise UnsupportedData("Unsupported chart type")

    def _is_first_dimension_sequential(self, result: Result) -> bool:
        last: SequenceMember | None = None
        direction: int | None = None

        for row in result.table:
            dimension = row.by_index(0)
            member = dimension.member if dimension is not None else None

            if not isinstance(member, SequenceMember):
                return False

            if last is not None:
                if type(last) is not type(member):
                    return False
                comparison = type(member).compare(last, member)
                if comparison == 0:
                    return False
                if direction is None:
                    direction = comparison
                elif comparison != direction:
                    return False

            last = member

        return True

    def _create_line_chart(self, result: Result) -> Chart:
        num_dimensions = len(result.table.row_prototype)

        if num_dimensions == 1:
            return self._create_bar_or_line_chart(result, TYPE_LINE)
        if num_dimensions == 2:
            return self._create_grouped_bar_chart(result, MULTI_LINE)

        raise UnsupportedData("Unsupported chart type")

    def _create_bar_or_line_chart(self, result: Result, chart_type: str) -> Chart:
        configuration = self.configuration_factory.create_chart_configuration()
        measures = result.table.row_prototype.measures
        selected_measures = self.select_measures(measures)
        num_measures = len(selected_measures)
        to_string = self.formatters.stringifier.to_string
        to_number = self.formatters.numberifier.to_number

        labels: list[str] = []
        datasets: dict[str, dict[str, Any]] = {}
        x_title: str | None = None
        y_title: str | None = None

        for name in selected_measures:
            measure = measures.by_name(name)
            if measure is None:
                raise UnsupportedData('Measure "{name}" not found', name=name)

            dataset = configuration.create_chart_element_configuration().to_dict()
            dataset["label"] = to_string(measure.label)
            dataset["data"] = []
            datasets[name] = dataset

            if y_title is None:
                unit = measure.unit
                if unit is None:
                    if num_measures == 1:
                        y_title = to_string(measure.label)
                elif num_measures == 1:
                    y_title = f"{to_string(measure.label)} - {to_string(unit)}"
                else:
                    y_title = to_string(unit)

        for row in result.table:
            if len(row) != 1:
                raise UnsupportedData("Expected only one member")

            dimension = row.by_index(0)
            if dimension is None:
                raise UnsupportedData("Expected only one member")

            if x_title is None:
                x_title = to_string(dimension.label)

            labels.append(to_string(dimension.display_member))

            for name in selected_measures:
                measure = row.measures.by_name(name)
                value = measure.value if measure is not None else None
                datasets[name]["data"].append(to_number(0 if value is None else value))

        if num_measures > 1:
            legend: dict[str, Any] = {"display": True, "position": "top"}
        else:
            legend = {"display": False}

        options = {
            "responsive": True,
            "locale": self.settings.locale,
            "plugins": {
                "legend": legend,
                "title": {"display": False},
            },
            "scales": {
                "x": {"title": self._title(x_title, configuration)},
                "y": {"title": self._title(y_title, configuration)},
            },
            "spanGaps": True,
        }

        return Chart(
            type=chart_type,
            data={"labels": labels, "datasets": list(datasets.values())},
            options=options,
        )

    def _create_grouped_bar_chart(self, result: Result, variant: str) -> Chart:
        configuration = self.configuration_factory.create_chart_configuration()
        first_measure = result.table.row_prototype.measures.by_index(0)
        to_string = self.formatters.stringifier.to_string
        to_number = self.formatters.numberifier.to_number

        if first_measure is None:
            raise UnsupportedData("Measures not found")

        labels: list[str] = []
        datasets: dict[int, dict[str, Any]] = {}
        x_title: str | None = None
        y_title: str | None = None
        legend_title: str | None = None

        # Distinct second-dimension members, in order of appearance
        second_members: list[Any] = []
        for row in result.table:
            second = row.by_index(1)
            if second is None:
                raise UnsupportedData("Expected a second dimension")
            if second.member not in second_members:
                second_members.append(second.member)

        for node in result.tree:
            labels.append(to_string(node.display_member))

            if x_title is None:
                x_title = to_string(node.label)

            for index, member in enumerate(second_members):
                if index not in datasets:
                    dataset = configuration.create_chart_element_configuration().to_dict()
                    dataset["data"] = []
                    datasets[index] = dataset
                dataset = datasets[index]

                child = node.traverse(member)
                if child is None:
                    dataset["data"].append(0)
                    continue

                if "label" not in dataset:
                    dataset["label"] = to_string(child.display_member)

                if legend_title is None:
                    legend_title = to_string(child.label)

                leaves = list(child)
                leaf = leaves[0] if leaves else None
                if leaf is None or leaf.measure is None:
                    raise UnsupportedData("Measures not found")

                dataset["data"].append(to_number(leaf.measure.value))

                if y_title is None:
                    unit = leaf.measure.unit
                    if unit is not None:
                        y_title = f"{to_string(leaf.display_member)} - {to_string(unit)}"
                    else:
                        y_title = to_string(leaf.display_member)

        scales: dict[str, Any] = {
            "x": {"title": self._title(x_title, configuration)},
            "y": {"title": self._title(y_title, configuration)},
        }
        if variant == STACKED_BAR:
            scales["x"]["stacked"] = True
            scales["y"]["stacked"] = True

        options = {
            "responsive": True,
            "locale": self.settings.locale,
            "scales": scales,
            "plugins": {
                "legend": {
                    "display": True,
                    "position": "top",
                    "title": self._title(legend_title, configuration),
                },
                "title": {"display": False},
            },
        }

        return Chart(
            type=TYPE_LINE if variant == MULTI_LINE else TYPE_BAR,
            data={"labels": labels, "datasets": list(datasets.values())},
            options=options,
        )

    def _create_pie_chart(self, result: Result) -> Chart:
        configuration = self.configuration_factory.create_chart_configuration()
        measures = result.table.row_prototype.measures
        selected_measures = self.select_measures(measures)
        to_string = self.formatters.stringifier.to_string
        to_number = self.formatters.numberifier.to_number

        if len(selected_measures) != 1:
            raise UnsupportedData("Only one measure is supported")

        name = selected_measures[0]
        measure = measures.by_name(name)

        labels: list[str] = []
        dataset: dict[str, Any] = {
            "label": to_string(measure.label if measure is not None else None),
            "data": [],
            "backgroundColor": [],
            "hoverOffset": 4,
        }

        for row in result.table:
            if len(row) != 1:
                raise UnsupportedData("Expected only one member")

            dimension = row.by_index(0)
            if dimension is None:
                raise UnsupportedData("Expected only one member")

            labels.append(to_string(dimension.display_member))

            row_measure = row.measures.by_name(name)
            dataset["data"].append(
                to_number(row_measure.value if row_measure is not None else None)
            )
            dataset["backgroundColor"].append(
                configuration.create_chart_element_configuration().area_color
            )

        return Chart(
            type=TYPE_PIE,
            data={"labels": labels, "datasets": [dataset]},
            options={"responsive": True, "locale": self.settings.locale},
        )

    @staticmethod
    def select_measures(measures: Measures) -> list[str]:
        """Pick the measures that can share one value axis.

        A unitless first measure is plotted alone; otherwise every measure
        whose unit signature matches the first measure's unit is selected.
        """
        selected: list[str] = []
        selected_unit = None

        for measure in measures:
            unit = measure.unit

            if not selected and unit is None:
                return [measure.name]

            if selected_unit is None:
                selected_unit = unit

            if (
                selected_unit is not None
                and unit is not None
                and selected_unit.signature == unit.signature
            ):
                selected.append(measure.name)

        return selected

    @staticmethod
    def _title(text: str | None, configuration: ChartConfiguration) -> dict[str, Any]:
        if text is None:
            return {"display": False}
        return {
            "display": True,
            "text": text,
            "font": configuration.chart_label_font().to_dict(),
        }
