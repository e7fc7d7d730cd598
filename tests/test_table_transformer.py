"""Tests for the pivot and flat table layouts."""

from __future__ import annotations

import pytest

from analytics_frontend.core.enums import Aggregation
from analytics_frontend.core.exceptions import EmptyResult, UnsupportedData
from analytics_frontend.result.model import DimensionField, MeasureField, Month, Result
from analytics_frontend.table import (
    DataCell,
    FooterCell,
    FrontendUtil,
    HeaderCell,
    Label,
    Member,
    PivotNode,
    PivotTableAdapter,
    TableAdapter,
    Value,
    transform_result_set_to_table,
    transform_tree_to_table,
)
from analytics_frontend.table.transformer import SUBTOTAL_LABEL, VALUE_LEGEND

JAN = Month(2024, 1)
FEB = Month(2024, 2)


def pivot(result: Result, **kwargs):
    return transform_tree_to_table(PivotTableAdapter.adapt(result.tree), **kwargs)


def cells(group) -> list[list]:
    return [row.cells for row in group]


class TestPivotTable:
    def test_values_pivoted_by_default(self, two_dim_result: Result) -> None:
        table = pivot(two_dim_result)

        assert cells(table.header) == [
            [
                HeaderCell(Label("Country")),
                HeaderCell(Label("Month")),
                HeaderCell(Member("Revenue")),
            ]
        ]
        assert cells(table.body) == [
            [
                HeaderCell(Member("ID"), row_span=2),
                HeaderCell(Member(JAN)),
                DataCell(Value(10)),
            ],
            [HeaderCell(Member(FEB)), DataCell(Value(20))],
            [HeaderCell(Member("MY")), HeaderCell(Member(JAN)), DataCell(Value(5))],
        ]
        assert len(table.footer) == 0

    def test_month_pivoted_into_columns(self, two_dim_result: Result) -> None:
        table = pivot(two_dim_result, pivoted_nodes=("month", "@values"))

        assert cells(table.header) == [
            [HeaderCell(Label("Month")), HeaderCell(Member(JAN)), HeaderCell(Member(FEB))],
            [
                HeaderCell(Label("Country")),
                HeaderCell(Member("Revenue")),
                HeaderCell(Member("Revenue")),
            ],
        ]
        assert cells(table.body) == [
            [HeaderCell(Member("ID")), DataCell(Value(10)), DataCell(Value(20))],
            [HeaderCell(Member("MY")), DataCell(Value(5)), DataCell("")],
        ]

    def test_nothing_pivoted_adds_value_column(self, two_dim_result: Result) -> None:
        table = pivot(two_dim_result, pivoted_nodes=())

        assert cells(table.header) == [
            [
                HeaderCell(Label("Country")),
                HeaderCell(Label("Month")),
                HeaderCell(""),
                HeaderCell(Label(VALUE_LEGEND)),
            ]
        ]
        first = table.body.rows[0].cells
        assert first == [
            HeaderCell(Member("ID"), row_span=2),
            HeaderCell(Member(JAN)),
            HeaderCell(Member("Revenue")),
            DataCell(Value(10)),
        ]

    def test_everything_pivoted(self, two_dim_result: Result) -> None:
        table = pivot(two_dim_result, pivoted_nodes=("country", "month", "@values"))

        header = cells(table.header)
        assert header[0] == [
            HeaderCell(Label("Country")),
            HeaderCell(Member("ID"), col_span=2),
            HeaderCell(Member("MY")),
        ]
        assert header[1] == [
            HeaderCell(Label("Month")),
            HeaderCell(Member(JAN)),
            HeaderCell(Member(FEB)),
            HeaderCell(Member(JAN)),
        ]
        assert header[2][0] == HeaderCell("")
        assert cells(table.body) == [
            [HeaderCell(""), DataCell(Value(10)), DataCell(Value(20)), DataCell(Value(5))]
        ]

    def test_superfluous_legends_can_be_kept(self, country_result: Result) -> None:
        table = pivot(country_result, pivoted_nodes=(), superfluous_legends=())

        legends = [str(cell.content.content) for cell in table.header.rows[0]]
        assert legends == ["Country", "Values", "Value"]

    def test_row_widths_match(self, two_dim_result: Result) -> None:
        table = pivot(two_dim_result, pivoted_nodes=("month", "@values"))
        widths = {row.width for row in table.header} | {row.width for row in table.body}
        assert widths == {3}

    def test_empty_tree(self) -> None:
        with pytest.raises(EmptyResult):
            transform_tree_to_table(PivotNode(key=None, legend=None, member=None, item=None))

    def test_display_members_are_used(self) -> None:
        tree = PivotNode(
            key=None,
            legend=None,
            member=None,
            item=None,
            children=[
                PivotNode(
                    key="country",
                    legend="Country",
                    member="ID",
                    item="Indonesia",
                    children=[
                        PivotNode(key="@values", legend="Values", member="count", item="Count", value=3)
                    ],
                )
            ],
        )
        table = transform_tree_to_table(tree)

        assert table.body.rows[0].cells[0] == HeaderCell(Member("Indonesia"))


    def test_rows_keep_order_within_each_group(self, product_result: Result) -> None:
        table = pivot(product_result)

        assert cells(table.body) == [
            [
                HeaderCell(Member("ID"), row_span=2),
                HeaderCell(Member("b")),
                DataCell(Value(9)),
                DataCell(Value(3)),
            ],
            [HeaderCell(Member("a")), DataCell(Value(5)), DataCell(Value(2))],
            [
                HeaderCell(Member("MY"), row_span=2),
                HeaderCell(Member("a")),
                DataCell(Value(8)),
                DataCell(Value(4)),
            ],
            [HeaderCell(Member("b")), DataCell(Value(1)), DataCell(Value(1))],
        ]

    def test_columns_merge_members_of_all_groups(self, product_result: Result) -> None:
        table = pivot(product_result, pivoted_nodes=("product", "@values"))

        assert table.header.rows[0].cells[1:] == [
            HeaderCell(Member("b"), col_span=2),
            HeaderCell(Member("a"), col_span=2),
        ]
        assert cells(table.body)[1] == [
            HeaderCell(Member("MY")),
            DataCell(Value(1)),
            DataCell(Value(1)),
            DataCell(Value(8)),
            DataCell(Value(4)),
        ]


class TestSubtotals:
    def test_subtotal_rows_and_grand_total(self, product_result: Result) -> None:
        table = pivot(product_result, subtotals=("country", "product"))

        subtotal = FooterCell(Label(SUBTOTAL_LABEL))
        assert cells(table.body) == [
            [
                HeaderCell(Member("ID"), row_span=3),
                HeaderCell(Member("b")),
                DataCell(Value(9)),
                DataCell(Value(3)),
            ],
            [HeaderCell(Member("a")), DataCell(Value(5)), DataCell(Value(2))],
            [subtotal, FooterCell(Value(14)), FooterCell("")],
            [
                HeaderCell(Member("MY"), row_span=3),
                HeaderCell(Member("a")),
                DataCell(Value(8)),
                DataCell(Value(4)),
            ],
            [HeaderCell(Member("b")), DataCell(Value(1)), DataCell(Value(1))],
            [subtotal, FooterCell(Value(9)), FooterCell("")],
        ]
        assert cells(table.footer) == [
            [
                FooterCell(Label(SUBTOTAL_LABEL), col_span=2),
                FooterCell(Value(23)),
                FooterCell(""),
            ]
        ]

    def test_one_subtotal_row_per_aggregated_measure(self, product_result: Result) -> None:
        table = pivot(product_result, pivoted_nodes=("product",), subtotals=("country",))

        assert cells(table.footer) == [
            [
                FooterCell(Label(SUBTOTAL_LABEL)),
                FooterCell(Member("Revenue")),
                FooterCell(Value(10)),
                FooterCell(Value(13)),
            ]
        ]
        assert len(table.body) == 4

    def test_no_subtotals_without_aggregation(self, two_dim_result: Result) -> None:
        table = pivot(two_dim_result, subtotals=("country", "month"))

        assert len(table.body) == 3
        assert len(table.footer) == 0

    def test_single_member_groups_are_not_subtotalled(self) -> None:
        result = Result.from_records(
            [DimensionField("country", "Country"), DimensionField("city", "City")],
            [MeasureField("count", "Count", aggregation=Aggregation.COUNT)],
            [
                {"country": "ID", "city": "Jakarta", "count": 4},
                {"country": "MY", "city": "Penang", "count": 2},
            ],
        )

        table = pivot(result, subtotals=("country", "city"))

        assert len(table.body) == 2
        assert cells(table.footer) == [
            [FooterCell(Label(SUBTOTAL_LABEL), col_span=2), FooterCell(Value(2))]
        ]



class TestFlatTable:
    def test_all_fields(self, two_dim_result: Result) -> None:
        table = transform_result_set_to_table(TableAdapter(two_dim_result))

        assert cells(table.header) == [
            [
                HeaderCell(Label("Country")),
                HeaderCell(Label("Month")),
                HeaderCell(Label("Revenue")),
            ]
        ]
        assert len(table.body) == 3
        assert table.body.rows[0].cells == [
            DataCell(Member("ID")),
            DataCell(Member(JAN)),
            DataCell(Value(10)),
        ]

    def test_selected_fields(self, two_dim_result: Result) -> None:
        adapter = TableAdapter(two_dim_result, dimensions=["month"], measures=[])
        table = transform_result_set_to_table(adapter)

        assert cells(table.header) == [[HeaderCell(Label("Month"))]]
        assert [row.cells[0].content for row in table.body] == [
            Member(JAN),
            Member(FEB),
            Member(JAN),
        ]

    def test_unordered_rows_are_kept_in_order(self, unordered_result: Result) -> None:
        table = transform_result_set_to_table(TableAdapter(unordered_result))
        assert [row.cells[1].content for row in table.body] == [Value(1), Value(2), Value(3)]

    def test_unknown_dimension(self, two_dim_result: Result) -> None:
        with pytest.raises(UnsupportedData, match='Unknown dimension "city"'):
            TableAdapter(two_dim_result, dimensions=["city"])

    def test_unknown_measure(self, two_dim_result: Result) -> None:
        with pytest.raises(UnsupportedData, match='Unknown measure "profit"'):
            TableAdapter(two_dim_result, measures=["profit"])


class TestFrontendUtil:
    def test_get_rows(self) -> None:
        assert FrontendUtil.get_rows(["country", "month", "city"], ["month"]) == [
            "country",
            "city",
        ]

    def test_get_rows_ignores_values_node(self) -> None:
        assert FrontendUtil.get_rows(["country"], ["@values"]) == ["country"]
