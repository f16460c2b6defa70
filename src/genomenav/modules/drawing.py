"""View windows onto a navigation context and their linear mapping to pixels."""

from typing import List, Optional

from genomenav.core.interval import ChromosomeInterval, OpenInterval
from genomenav.modules.navigation_context import NavigationContext


class DisplayedRegion:
    """
    A window [start, end) of context coordinates within a navigation context.

    Instances are immutable; navigation methods return new regions.  Regions are
    always kept inside [0, total bases] of their context.
    """

    def __init__(self, nav_context: NavigationContext, start: int = 0,
                 end: Optional[int] = None) -> None:
        self._nav_context = nav_context
        total = nav_context.get_total_bases()
        if end is None:
            end = total
        self._start, self._end = self._clamp(start, end, total)

    @staticmethod
    def _clamp(start: int, end: int, total: int):
        width = min(max(end - start, 0), total)
        if start < 0:
            start = 0
        if start + width > total:
            start = total - width
        return start, start + width

    def get_navigation_context(self) -> NavigationContext:
        return self._nav_context

    def get_context_coordinates(self) -> OpenInterval:
        return OpenInterval(self._start, self._end)

    def get_width(self) -> int:
        return self._end - self._start

    def get_genome_intervals(self) -> List[ChromosomeInterval]:
        """Genomic loci visible in this region, merged."""
        return self._nav_context.get_loci_in_interval(self._start, self._end)

    def set_region(self, start: int, end: int) -> "DisplayedRegion":
        """New region over [start, end), shifted back inside the context if needed."""
        return DisplayedRegion(self._nav_context, start, end)

    def pan(self, delta: int) -> "DisplayedRegion":
        """New region moved by ``delta`` bases; positive pans right."""
        return self.set_region(self._start + delta, self._end + delta)

    def zoom(self, factor: float, focal_point: float = 0.5) -> "DisplayedRegion":
        """
        New region scaled around a focal point.

        Args:
            factor: Width multiplier; values below 1 zoom in
            focal_point: Relative position in the region that stays fixed, 0 to 1

        Returns:
            Zoomed DisplayedRegion
        """
        if factor <= 0:
            raise ValueError(f"Zoom factor must be positive, got {factor}")
        width = self.get_width()
        focal_base = self._start + width * focal_point
        new_width = max(1, int(round(width * factor)))
        new_start = int(round(focal_base - new_width * focal_point))
        return self.set_region(new_start, new_start + new_width)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DisplayedRegion):
            return NotImplemented
        return (self._nav_context is other._nav_context
                and self._start == other._start and self._end == other._end)

    def __hash__(self) -> int:
        return hash((id(self._nav_context), self._start, self._end))

    def __repr__(self) -> str:
        return f"DisplayedRegion({self._nav_context.get_name()!r}, {self._start}, {self._end})"


class LinearDrawingModel:
    """
    Linear transform from context coordinates in a view region to pixels.

    A view of zero width or a non-positive pixel width maps every base to x = 0.
    """

    def __init__(self, view_region: DisplayedRegion, width: float) -> None:
        self._view_start = view_region.get_context_coordinates().start
        self._view_width = view_region.get_width()
        self._draw_width = max(width, 0)
        if self._view_width > 0:
            self._pixels_per_base = self._draw_width / self._view_width
        else:
            self._pixels_per_base = 0.0

    def get_draw_width(self) -> float:
        return self._draw_width

    def bases_to_xwidth(self, bases: float) -> float:
        if self._view_width <= 0:
            return 0.0
        return bases * self._draw_width / self._view_width

    def xwidth_to_bases(self, pixels: float) -> float:
        if self._pixels_per_base == 0:
            return 0.0
        return pixels / self._pixels_per_base

    def base_to_x(self, base: float) -> float:
        return self.bases_to_xwidth(base - self._view_start)

    def x_to_base(self, x: float) -> float:
        return self.xwidth_to_bases(x) + self._view_start

    def base_span_to_x_span(self, span: OpenInterval) -> OpenInterval:
        return OpenInterval(self.base_to_x(span.start), self.base_to_x(span.end))
