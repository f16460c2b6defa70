"""Features, feature segments and paired-locus interactions."""

from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING

from genomenav.core.interval import ChromosomeInterval, OpenInterval
from genomenav.core.types import GAP_CHR, VALID_STRANDS

if TYPE_CHECKING:
    from genomenav.modules.navigation_context import NavigationContext


@dataclass(frozen=True)
class Feature:
    """
    Named entity anchored to a genomic locus.

    Gap features mark non-genomic filler space; their locus lies on the reserved
    empty chromosome.  ``handle`` is assigned by the navigation context a feature is
    built into and does not take part in equality.
    """
    name: str
    locus: ChromosomeInterval
    strand: str = '.'
    is_gap: bool = False
    handle: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Feature name must be non-empty")
        if self.strand not in VALID_STRANDS:
            raise ValueError(f"Invalid strand: {self.strand}")
        if self.is_gap and self.locus.chr != GAP_CHR:
            raise ValueError(f"Gap feature \"{self.name}\" must lie on the gap chromosome")
        if self.locus.chr == GAP_CHR:
            object.__setattr__(self, 'is_gap', True)

    @classmethod
    def make_gap(cls, length: float, name: str = "Gap") -> "Feature":
        """
        Make a feature representing a gap in the genome.

        Args:
            length: Length of the gap in bases; rounded to an integer
            name: Name of the gap feature

        Returns:
            Gap feature
        """
        return cls(name, ChromosomeInterval(GAP_CHR, 0, int(round(length))), is_gap=True)

    def get_name(self) -> str:
        return self.name

    def get_locus(self) -> ChromosomeInterval:
        return self.locus

    def get_length(self) -> int:
        return self.locus.get_length()

    def is_forward_strand(self) -> bool:
        return self.strand == '+'

    def is_reverse_strand(self) -> bool:
        return self.strand == '-'

    def compute_nav_context_coordinates(self, nav_context: "NavigationContext") -> List[OpenInterval]:
        """All context intervals this feature's locus maps to; may be empty."""
        return nav_context.convert_genome_interval_to_bases(self.locus)


@dataclass(frozen=True)
class FeatureSegment:
    """Part of a feature, in bases relative to the start of the feature."""
    feature: Feature
    relative_start: int = 0
    relative_end: Optional[int] = None

    def __post_init__(self) -> None:
        if self.relative_end is None:
            object.__setattr__(self, 'relative_end', self.feature.get_length())
        if self.relative_start < 0:
            raise ValueError(f"Relative start must be >= 0, got {self.relative_start}")
        if self.relative_end < self.relative_start:
            raise ValueError(
                f"Relative end {self.relative_end} must be >= relative start {self.relative_start}"
            )
        if self.relative_end > self.feature.get_length():
            raise ValueError(
                f"Segment end {self.relative_end} exceeds length of feature "
                f"\"{self.feature.name}\" ({self.feature.get_length()})"
            )

    def get_length(self) -> int:
        return self.relative_end - self.relative_start

    def get_locus(self) -> ChromosomeInterval:
        """The genomic locus this segment covers."""
        feature_locus = self.feature.get_locus()
        return ChromosomeInterval(
            feature_locus.chr,
            feature_locus.start + self.relative_start,
            feature_locus.start + self.relative_end
        )

    def get_genome_overlap(self, locus: ChromosomeInterval) -> Optional["FeatureSegment"]:
        """
        Intersect this segment with a genomic locus.

        Args:
            locus: Genomic locus

        Returns:
            The overlapping part of this segment, or None
        """
        overlap = self.get_locus().get_overlap(locus)
        if overlap is None:
            return None
        feature_start = self.feature.get_locus().start
        return FeatureSegment(self.feature, overlap.start - feature_start, overlap.end - feature_start)

    def get_overlap(self, other: "FeatureSegment") -> Optional["FeatureSegment"]:
        """Intersect with another segment; segments of different features never overlap."""
        if self.feature != other.feature:
            return None
        overlap = OpenInterval(self.relative_start, self.relative_end).get_overlap(
            OpenInterval(other.relative_start, other.relative_end)
        )
        if overlap is None:
            return None
        return FeatureSegment(self.feature, overlap.start, overlap.end)

    def __str__(self) -> str:
        return f"{self.feature.name}:{self.relative_start}-{self.relative_end}"


@dataclass(frozen=True)
class GenomeInteraction:
    """Two genomic loci that interact, such as a chromatin contact."""
    locus1: ChromosomeInterval
    locus2: ChromosomeInterval
    score: float = 0.0

    def get_distance(self) -> Optional[int]:
        """Distance between the two loci on the same chromosome, else None."""
        if self.locus1.chr != self.locus2.chr:
            return None
        return max(0, max(self.locus1.start, self.locus2.start) - min(self.locus1.end, self.locus2.end))

    def __str__(self) -> str:
        return self.locus1.to_string_with_other(self.locus2)
