"""Coordinate, placement and layout modules."""

from . import navigation_context
from . import drawing
from . import feature_placer
from . import interval_arranger
from . import output
