"""Half-open interval primitives for context, pixel and genome coordinates."""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union, Iterable

from genomenav.core.exceptions import LocusParseError


Number = Union[int, float]

LOCUS_PATTERN = re.compile(r'^\s*([\w.:|-]+?):([\d,]+)-([\d,]+)\s*$')


@dataclass(frozen=True)
class OpenInterval:
    """Interval [start, end).  Used for context coordinates and for pixel spans."""
    start: Number
    end: Number

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"Interval end {self.end} must be >= start {self.start}")

    def get_length(self) -> Number:
        return self.end - self.start

    def get_overlap(self, other: "OpenInterval") -> Optional["OpenInterval"]:
        """
        Intersect two intervals.

        Args:
            other: Interval to intersect with

        Returns:
            The intersection, or None if the intervals do not overlap.  Intervals that
            only share an endpoint do not overlap.
        """
        overlap_start = max(self.start, other.start)
        overlap_end = min(self.end, other.end)
        if overlap_start >= overlap_end:
            return None
        return OpenInterval(overlap_start, overlap_end)

    def to_span(self) -> Tuple[Number, Number]:
        return (self.start, self.end)

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"


@dataclass(frozen=True)
class ChromosomeInterval:
    """Genomic locus: chromosome plus a 0-indexed, end-exclusive base range."""
    chr: str
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"Locus end {self.end} must be >= start {self.start}")

    @classmethod
    def parse(cls, text: str) -> "ChromosomeInterval":
        """
        Parse a locus formatted like "chr1:100-200".

        Args:
            text: Locus text; numbers may contain thousands separators

        Returns:
            Parsed ChromosomeInterval

        Raises:
            LocusParseError: If the text is malformed or start >= end
        """
        match = LOCUS_PATTERN.match(text or "")
        if not match:
            raise LocusParseError(f"Could not parse locus \"{text}\"", text=text)

        chr_name = match.group(1)
        start = int(match.group(2).replace(',', ''))
        end = int(match.group(3).replace(',', ''))
        if start >= end:
            raise LocusParseError(
                f"Start base must be less than end base in \"{text}\"", text=text
            )
        return cls(chr_name, start, end)

    @staticmethod
    def merge_overlaps(loci: Iterable["ChromosomeInterval"]) -> List["ChromosomeInterval"]:
        """
        Merge loci that overlap or touch into a minimal sorted cover.

        Args:
            loci: Loci in any order

        Returns:
            Loci sorted by (chr, start), pairwise non-overlapping and non-touching
        """
        sorted_loci = sorted(loci, key=lambda locus: (locus.chr, locus.start))
        merged: List[ChromosomeInterval] = []
        for locus in sorted_loci:
            if merged:
                last = merged[-1]
                if last.chr == locus.chr and locus.start <= last.end:
                    merged[-1] = ChromosomeInterval(last.chr, last.start, max(last.end, locus.end))
                    continue
            merged.append(locus)
        return merged

    def get_length(self) -> int:
        return self.end - self.start

    def get_overlap(self, other: "ChromosomeInterval") -> Optional["ChromosomeInterval"]:
        if self.chr != other.chr:
            return None
        overlap = self.to_open_interval().get_overlap(other.to_open_interval())
        if overlap is None:
            return None
        return ChromosomeInterval(self.chr, overlap.start, overlap.end)

    def to_open_interval(self) -> OpenInterval:
        return OpenInterval(self.start, self.end)

    def to_string_with_other(self, other: "ChromosomeInterval") -> str:
        return f"{self} / {other}"

    def __str__(self) -> str:
        return f"{self.chr}:{self.start}-{self.end}"
