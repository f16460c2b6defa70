"""Shared fixtures for genomenav tests."""

import pytest

from genomenav.core.feature import Feature
from genomenav.core.interval import ChromosomeInterval
from genomenav.modules.navigation_context import NavigationContext
from genomenav.modules.drawing import DisplayedRegion, LinearDrawingModel


@pytest.fixture
def gapped_context():
    """[10bp chr1 feature, 10bp gap, 10bp chr2 feature]."""
    return NavigationContext("gapped", [
        Feature("f1", ChromosomeInterval("chr1", 0, 10)),
        NavigationContext.make_gap(10),
        Feature("f2", ChromosomeInterval("chr2", 100, 110)),
    ])


@pytest.fixture
def chr1_context():
    """A single 100bp region so that context coordinates equal chr1 coordinates."""
    return NavigationContext("chr1", [Feature("chr1", ChromosomeInterval("chr1", 0, 100))])


@pytest.fixture
def repeated_context():
    """Two regions covering chr1:50-100 twice, at context [50, 100) and [100, 150)."""
    return NavigationContext("repeated", [
        Feature("exonA", ChromosomeInterval("chr1", 0, 100)),
        Feature("exonA_copy", ChromosomeInterval("chr1", 50, 150)),
    ])


@pytest.fixture
def identity_draw_model(chr1_context):
    """Drawing model where one base is one pixel and x equals the context coordinate."""
    return LinearDrawingModel(DisplayedRegion(chr1_context), 100)
