"""Row packing of intervals so that intervals in the same row do not collide."""

import logging
import math
from typing import Any, Callable, List, Optional, Sequence

from genomenav.modules.drawing import LinearDrawingModel


logger = logging.getLogger(__name__)

DEFAULT_NUM_ROWS = 10


def _no_padding(interval: Any) -> float:
    return 0


class IntervalArranger:
    """
    Assigns intervals to a bounded number of rows, first fit.

    Intervals are anything with ``start`` and ``end`` attributes in context
    coordinates, such as OpenInterval or PlacedFeature.  An interval that fits in
    no row gets row -1.

    Args:
        draw_model: Model used to find where intervals are drawn
        num_rows: Maximum number of rows
        get_padding: Horizontal padding in pixels for an interval; defaults to 0
    """

    def __init__(self, draw_model: LinearDrawingModel, num_rows: int = DEFAULT_NUM_ROWS,
                 get_padding: Optional[Callable[[Any], float]] = None) -> None:
        self.draw_model = draw_model
        self.num_rows = num_rows
        self.get_padding = get_padding or _no_padding

    @staticmethod
    def _sort_order(intervals: Sequence[Any]) -> List[int]:
        """Indices sorted by start; on equal starts the longer interval comes first."""
        return sorted(
            range(len(intervals)),
            key=lambda i: (intervals[i].start, -(intervals[i].end - intervals[i].start))
        )

    def arrange(self, intervals: Sequence[Any]) -> List[int]:
        """
        Assign each interval a row index.

        Args:
            intervals: Intervals to arrange

        Returns:
            Row index for each interval, in the same order as ``intervals``; -1 for
            intervals that fit in no row
        """
        rows = [-1] * len(intervals)
        if self.num_rows <= 0:
            return rows

        max_x_for_rows = [-math.inf] * self.num_rows
        for index in self._sort_order(intervals):
            interval = intervals[index]
            padding = self.get_padding(interval)
            start_x = self.draw_model.base_to_x(interval.start) - padding
            for row, max_x in enumerate(max_x_for_rows):
                if max_x < start_x:
                    max_x_for_rows[row] = self.draw_model.base_to_x(interval.end) + padding
                    rows[index] = row
                    break

        n_unplaced = rows.count(-1)
        if n_unplaced:
            logger.debug(f"{n_unplaced} of {len(intervals)} intervals did not fit in {self.num_rows} rows")
        return rows


def get_num_rows_used(rows: Sequence[int]) -> int:
    """Number of rows occupied by an arrangement."""
    return max(rows, default=-1) + 1
