"""Projection of features, feature segments and interactions into a view."""

import logging
from dataclasses import dataclass
from typing import Iterable, List

from genomenav.core.feature import Feature, FeatureSegment, GenomeInteraction
from genomenav.core.interval import OpenInterval
from genomenav.modules.drawing import DisplayedRegion, LinearDrawingModel
from genomenav.modules.navigation_context import NavigationContext


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacedFeature:
    """Draw information for one placement of a feature."""
    feature: Feature
    visible_part: FeatureSegment  # Part of the feature inside the view
    context_location: OpenInterval  # Visible part in context coordinates
    x_span: OpenInterval  # Visible part in pixels

    @property
    def start(self):
        return self.context_location.start

    @property
    def end(self):
        return self.context_location.end


@dataclass(frozen=True)
class PlacedSegment:
    segment: FeatureSegment  # Truncated to the parent's visible part
    x_span: OpenInterval


@dataclass(frozen=True)
class PlacedInteraction:
    """
    Draw information for an interaction.  ``x_span1`` always has the lower start of
    the two spans.
    """
    interaction: GenomeInteraction
    x_span1: OpenInterval
    x_span2: OpenInterval

    def __post_init__(self) -> None:
        if self.x_span2.start < self.x_span1.start:
            span1 = self.x_span1
            object.__setattr__(self, 'x_span1', self.x_span2)
            object.__setattr__(self, 'x_span2', span1)

    def get_width(self) -> float:
        """Horizontal extent of both spans together."""
        return max(self.x_span1.end, self.x_span2.end) - self.x_span1.start

    def generate_key(self) -> str:
        return f"{self.x_span1.start}-{self.x_span1.end}|{self.x_span2.start}-{self.x_span2.end}"


class FeaturePlacer:
    """Stateless; every method is a pure function of its arguments."""

    def place_features(self, features: Iterable[Feature], view_region: DisplayedRegion,
                       width: float) -> List[PlacedFeature]:
        """
        Compute context and pixel locations for features.

        A feature can map to several places in the navigation context, or to none, so
        the number of placements can differ from the number of features.

        Args:
            features: Features to place
            view_region: Region in which to draw
            width: Pixel width of the visualization

        Returns:
            Placements of the parts of features inside the view
        """
        draw_model = LinearDrawingModel(view_region, width)
        view_bounds = view_region.get_context_coordinates()
        nav_context = view_region.get_navigation_context()

        placements = []
        for feature in features:
            for context_location in feature.compute_nav_context_coordinates(nav_context):
                context_location = context_location.get_overlap(view_bounds)
                if context_location is None:
                    continue
                x_span = draw_model.base_span_to_x_span(context_location)
                visible_part = self._get_visible_segment(feature, nav_context, context_location)
                placements.append(PlacedFeature(feature, visible_part, context_location, x_span))

        logger.debug(f"Placed {len(placements)} features in {view_region!r}")
        return placements

    @staticmethod
    def _get_visible_segment(feature: Feature, nav_context: NavigationContext,
                             context_location: OpenInterval) -> FeatureSegment:
        placed_locus = nav_context.convert_base_to_feature_coordinate(context_location.start).get_locus()
        relative_start = max(0, placed_locus.start - feature.get_locus().start)
        return FeatureSegment(feature, relative_start, relative_start + context_location.get_length())

    def place_feature_segments(self, placed_feature: PlacedFeature,
                               segments: Iterable[FeatureSegment]) -> List[PlacedSegment]:
        """
        Compute pixel spans for segments of an already placed feature.

        Args:
            placed_feature: Placement of the segments' parent feature
            segments: Segments of the parent feature

        Returns:
            Placements of the segment parts inside the parent's visible part
        """
        context_length = placed_feature.context_location.get_length()
        if context_length > 0:
            pixels_per_base = placed_feature.x_span.get_length() / context_length
        else:
            pixels_per_base = 0.0

        placements = []
        for segment in segments:
            visible_segment = segment.get_overlap(placed_feature.visible_part)
            if visible_segment is None:
                continue
            bases_from_visible_part = visible_segment.relative_start - placed_feature.visible_part.relative_start
            x_start = placed_feature.x_span.start + bases_from_visible_part * pixels_per_base
            x_length = visible_segment.get_length() * pixels_per_base
            placements.append(PlacedSegment(visible_segment, OpenInterval(x_start, x_start + x_length)))
        return placements

    def place_interactions(self, interactions: Iterable[GenomeInteraction],
                           view_region: DisplayedRegion, width: float) -> List[PlacedInteraction]:
        """
        Compute pixel spans for both loci of each interaction.

        Every combination of a visible placement of the first locus with a visible
        placement of the second is emitted.
        """
        draw_model = LinearDrawingModel(view_region, width)
        view_bounds = view_region.get_context_coordinates()
        nav_context = view_region.get_navigation_context()

        placements = []
        for interaction in interactions:
            locations1 = self._clip_all(nav_context.convert_genome_interval_to_bases(interaction.locus1),
                                        view_bounds)
            locations2 = self._clip_all(nav_context.convert_genome_interval_to_bases(interaction.locus2),
                                        view_bounds)
            for location1 in locations1:
                for location2 in locations2:
                    placements.append(PlacedInteraction(
                        interaction,
                        draw_model.base_span_to_x_span(location1),
                        draw_model.base_span_to_x_span(location2)
                    ))

        logger.debug(f"Placed {len(placements)} interactions in {view_region!r}")
        return placements

    @staticmethod
    def _clip_all(locations: List[OpenInterval], bounds: OpenInterval) -> List[OpenInterval]:
        clipped = (location.get_overlap(bounds) for location in locations)
        return [location for location in clipped if location is not None]
