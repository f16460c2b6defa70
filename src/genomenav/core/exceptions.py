"""Custom exceptions for the coordinate and layout layer."""

import time
from typing import Optional, List
from pathlib import Path


class GenomeNavError(Exception):
    """Base exception for genomenav errors."""

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        self.stage = stage
        self.timestamp = time.time()
        super().__init__(message)


class ContextConstructionError(GenomeNavError):
    """A navigation context could not be built from its feature list."""

    def __init__(self, message: str, feature_name: Optional[str] = None,
                 stage: Optional[str] = None) -> None:
        self.feature_name = feature_name
        super().__init__(message, stage)


class CoordinateRangeError(GenomeNavError, IndexError):
    """A base, feature or locus lies outside a navigation context."""


class LocusParseError(GenomeNavError, ValueError):
    """Locus text is malformed."""

    def __init__(self, message: str, text: Optional[str] = None,
                 stage: Optional[str] = None) -> None:
        self.text = text
        super().__init__(message, stage)


class ValidationError(GenomeNavError):
    """Data validation failed."""

    def __init__(self, message: str, errors: Optional[List[str]] = None,
                 stage: Optional[str] = None) -> None:
        self.errors = errors or []
        super().__init__(message, stage)


class ConfigurationError(GenomeNavError):
    """Configuration error."""

    def __init__(self, message: str, config_path: Optional[Path] = None,
                 stage: Optional[str] = None) -> None:
        self.config_path = config_path
        super().__init__(message, stage)
