from __future__ import annotations

from collections.abc import Sequence


class FrontendUtil:
    @staticmethod
    def get_rows(dimensions: Sequence[str], columns: Sequence[str]) -> list[str]:
        """Return the dimensions that are not pivoted into columns, in order.

        Args:
            dimensions: All dimension names, in drill-down order
            columns: Dimension names rendered as column headers

        Returns:
            Remaining dimension names for the row headers
        """
        return [d for d in dimensions if d not in columns]
