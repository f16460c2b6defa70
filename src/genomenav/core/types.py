"""Core data types shared by the configuration and layout layers."""

from dataclasses import dataclass, field
from typing import Dict, List, Any


# Chromosome name reserved for gap features.
GAP_CHR = ""

VALID_STRANDS = ('+', '-', '.')


@dataclass
class RegionDescriptor:
    """One entry of the ordered region list a navigation context is built from."""
    name: str
    chr: str
    start: int
    end: int
    strand: str = '.'

    @property
    def is_gap(self) -> bool:
        return self.chr == GAP_CHR

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegionDescriptor":
        """
        Build a descriptor from a configuration mapping.

        Accepts either ``{name, chr, start, end[, strand]}`` or ``{name, gap: length}``.

        Args:
            data: Mapping read from a configuration file

        Returns:
            RegionDescriptor
        """
        if "gap" in data:
            return cls(
                name=data.get("name", "Gap"),
                chr=GAP_CHR,
                start=0,
                end=int(round(data["gap"]))
            )
        return cls(
            name=data["name"],
            chr=str(data["chr"]),
            start=int(data["start"]),
            end=int(data["end"]),
            strand=data.get("strand", '.')
        )


def validate_region_descriptor(region: RegionDescriptor) -> None:
    """
    Validate region descriptor integrity.

    Args:
        region: RegionDescriptor to validate

    Raises:
        ValueError: If validation fails
    """
    if not region.name:
        raise ValueError("Region name must be non-empty")
    if region.start < 0:
        raise ValueError(f"Start coordinate must be >= 0, got {region.start}")
    if region.end < region.start:
        raise ValueError(f"End coordinate {region.end} must be >= start {region.start}")
    if region.strand not in VALID_STRANDS:
        raise ValueError(f"Invalid strand: {region.strand}")


@dataclass
class ValidationResult:
    """Result of validation operation."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)
