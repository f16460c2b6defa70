"""
Navigation context: the virtual coordinate space of a genome or gene set view.

A context concatenates an ordered list of features into one coordinate system in
which every navigable base has an integer context coordinate.  Features must have
non-empty, unique names.  Besides context coordinates, the context also speaks
feature coordinates (a feature plus a base offset from the feature's start) and
genomic loci.
"""

import logging
import re
from dataclasses import replace
from typing import Dict, List, Sequence

import numpy as np

from genomenav.core.exceptions import ContextConstructionError, CoordinateRangeError
from genomenav.core.feature import Feature, FeatureSegment
from genomenav.core.interval import ChromosomeInterval, OpenInterval
from genomenav.core.types import GAP_CHR


logger = logging.getLogger(__name__)

LOCUS_LIKE_PATTERN = re.compile(r'([\w:]+):([\d,]+)-([\d,]+)')


class NavigationContext:
    """
    Immutable, ordered coordinate space built from a feature list.

    Each feature is re-issued with an integer handle equal to its index; internal
    lookups are keyed by that handle.  Instances are never mutated after
    construction, so they can be shared freely between readers.
    """

    def __init__(self, name: str, features: Sequence[Feature]) -> None:
        """
        Build the coordinate space.

        Args:
            name: Name of this context
            features: Ordered features; names must be unique

        Raises:
            ContextConstructionError: If a feature name is repeated
        """
        self._name = name
        self._features: List[Feature] = []
        self._handle_for_name: Dict[str, int] = {}
        self._features_for_chr: Dict[str, List[Feature]] = {}

        for handle, feature in enumerate(features):
            if feature.name in self._handle_for_name:
                raise ContextConstructionError(
                    f"Duplicate feature \"{feature.name}\" detected.  Features must be unique.",
                    feature_name=feature.name,
                    stage="navigation_context"
                )
            feature = replace(feature, handle=handle)
            self._handle_for_name[feature.name] = handle
            self._features.append(feature)
            self._features_for_chr.setdefault(feature.locus.chr, []).append(feature)

        lengths = np.array([feature.get_length() for feature in self._features], dtype=np.int64)
        ends = np.cumsum(lengths)
        self._sorted_feature_starts = ends - lengths
        self._gap_lengths = np.where(
            [feature.is_gap for feature in self._features], lengths, 0
        ).astype(np.int64)
        self._total_bases = int(ends[-1]) if len(ends) else 0

        logger.debug(
            f"Built navigation context \"{name}\" with {len(self._features)} features, "
            f"{self._total_bases} bases, {len(self._features_for_chr)} chromosome groups"
        )

    @staticmethod
    def make_gap(length: float, name: str = "Gap") -> Feature:
        """Make a gap feature to insert into a context's feature list."""
        return Feature.make_gap(length, name)

    @staticmethod
    def is_gap_feature(feature: Feature) -> bool:
        return feature.is_gap

    def get_name(self) -> str:
        return self._name

    def get_features(self) -> List[Feature]:
        """Features of this context, in order, carrying their handles."""
        return list(self._features)

    def get_total_bases(self) -> int:
        return self._total_bases

    def is_valid_base(self, base: int) -> bool:
        return 0 <= base < self._total_bases

    def _get_handle(self, feature: Feature) -> int:
        handle = feature.handle
        if handle is not None and 0 <= handle < len(self._features) \
                and self._features[handle] == feature:
            return handle
        handle = self._handle_for_name.get(feature.name)
        if handle is not None and self._features[handle] == feature:
            return handle
        raise CoordinateRangeError(f"Feature \"{feature.name}\" not in this navigation context")

    def get_feature_start(self, feature: Feature) -> int:
        """
        Context coordinate of a feature's start.

        Raises:
            CoordinateRangeError: If the feature is not in this context
        """
        return int(self._sorted_feature_starts[self._get_handle(feature)])

    def convert_base_to_feature_coordinate(self, base: int) -> FeatureSegment:
        """
        Find the feature containing a context coordinate.

        Args:
            base: Context coordinate

        Returns:
            Zero-length FeatureSegment at the base's offset within its feature

        Raises:
            CoordinateRangeError: If the base is not in this context
        """
        if not self.is_valid_base(base):
            raise CoordinateRangeError(
                f"Base number {base} is invalid.  Valid bases in this context: [0, {self._total_bases})"
            )
        index = int(np.searchsorted(self._sorted_feature_starts, base, side='right')) - 1
        coordinate = int(base - self._sorted_feature_starts[index])
        return FeatureSegment(self._features[index], coordinate, coordinate)

    def convert_feature_segment_to_context_coordinates(self, segment: FeatureSegment) -> OpenInterval:
        context_start = self.get_feature_start(segment.feature)
        return OpenInterval(context_start + segment.relative_start, context_start + segment.relative_end)

    def convert_genome_interval_to_bases(self, locus: ChromosomeInterval) -> List[OpenInterval]:
        """
        Map a genomic locus to context coordinates.

        A locus can be covered by several features or by none, so the result is a
        list with one interval per overlapping feature.
        """
        context_intervals = []
        for feature in self._features_for_chr.get(locus.chr, []):
            overlap = FeatureSegment(feature).get_genome_overlap(locus)
            if overlap is not None:
                context_intervals.append(self.convert_feature_segment_to_context_coordinates(overlap))
        return context_intervals

    def to_gapless_coordinate(self, base: int) -> int:
        """
        Context coordinate ``base`` would have if this context contained no gaps.

        Example:
            For [10bp feature, 10bp gap, 10bp feature], 5 -> 5, 15 -> 10, 25 -> 15.
        """
        feature_coordinate = self.convert_base_to_feature_coordinate(base)
        index = feature_coordinate.feature.handle
        gap_bases_before = int(self._gap_lengths[:index].sum())
        if feature_coordinate.feature.is_gap:
            gap_bases_before += feature_coordinate.relative_start
        return base - gap_bases_before

    def parse(self, text: str) -> OpenInterval:
        """
        Parse a location in this context.

        Args:
            text: Either "chr:start-end" (0-indexed, end-exclusive) or a feature name

        Returns:
            Context interval of the location

        Raises:
            LocusParseError: If the text looks like a locus but is malformed
            CoordinateRangeError: If the location is not in this context
        """
        if LOCUS_LIKE_PATTERN.search(text):
            locus = ChromosomeInterval.parse(text)
            context_intervals = self.convert_genome_interval_to_bases(locus)
            if not context_intervals:
                raise CoordinateRangeError(f"Location {locus} not available in this context")
            return context_intervals[0]

        handle = self._handle_for_name.get(text)
        if handle is None:
            raise CoordinateRangeError(f"Could not find feature or chromosome with name of \"{text}\"")
        return self.convert_feature_segment_to_context_coordinates(FeatureSegment(self._features[handle]))

    def get_features_in_interval(self, query_start: int, query_end: int,
                                 include_gaps: bool = True) -> List[FeatureSegment]:
        """
        Feature segments overlapping a context interval, clipped to it.

        Args:
            query_start: Inclusive start context coordinate
            query_end: Exclusive end context coordinate
            include_gaps: Whether to include gap features

        Returns:
            FeatureSegments in context order
        """
        if query_end <= query_start:
            return []
        query = OpenInterval(query_start, query_end)
        results = []
        for feature, start in zip(self._features, self._sorted_feature_starts):
            if not include_gaps and feature.is_gap:
                continue
            if feature.get_length() == 0:
                continue
            start = int(start)
            overlap = OpenInterval(start, start + feature.get_length()).get_overlap(query)
            if overlap is not None:
                results.append(FeatureSegment(feature, overlap.start - start, overlap.end - start))
            elif results:
                break
        return results

    def get_loci_in_interval(self, query_start: int, query_end: int) -> List[ChromosomeInterval]:
        """Merged, non-overlapping genomic loci under a context interval."""
        segments = self.get_features_in_interval(query_start, query_end, include_gaps=False)
        return ChromosomeInterval.merge_overlaps(segment.get_locus() for segment in segments)

    def get_chromosomes(self) -> List[str]:
        """Chromosomes with at least one feature, in first-appearance order, gaps excluded."""
        return [chr_name for chr_name in self._features_for_chr if chr_name != GAP_CHR]

    def __len__(self) -> int:
        return len(self._features)

    def __repr__(self) -> str:
        return f"NavigationContext(name={self._name!r}, features={len(self._features)}, bases={self._total_bases})"
