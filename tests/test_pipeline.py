"""Tests for genomenav.pipeline."""

import pytest

from genomenav.core.exceptions import ValidationError
from genomenav.core.feature import Feature, GenomeInteraction
from genomenav.core.interval import ChromosomeInterval
from genomenav.pipeline import run_layout_pipeline
from genomenav.utils.config import create_default_configuration


@pytest.fixture
def config():
    config = create_default_configuration()
    config["context"] = {
        "name": "two genes",
        "regions": [
            {"name": "a", "chr": "chr1", "start": 0, "end": 100},
            {"name": "Gap", "gap": 50},
            {"name": "b", "chr": "chr2", "start": 0, "end": 50},
        ]
    }
    config["view"] = {"start": 0, "end": None, "width": 200}
    return config


class TestRunLayoutPipeline:
    """Tests for run_layout_pipeline."""

    def test_default_features(self, config):
        results = run_layout_pipeline(config)
        assert results["total_bases"] == 200
        assert results["n_features"] == 2
        assert results["n_placements"] == 2
        assert results["rows"] == [0, 0]
        assert results["n_rows_used"] == 1

    def test_given_features(self, config):
        features = [
            Feature("x", ChromosomeInterval("chr1", 10, 50)),
            Feature("y", ChromosomeInterval("chr1", 40, 90)),
            Feature("z", ChromosomeInterval("chr3", 0, 10)),
        ]
        results = run_layout_pipeline(config, features=features)
        assert results["n_features"] == 3
        assert results["n_placements"] == 2
        assert results["rows"] == [0, 1]

    def test_rows_limited(self, config):
        config["layout"]["num_rows"] = 1
        features = [Feature(f"f{i}", ChromosomeInterval("chr1", 0, 50)) for i in range(3)]
        results = run_layout_pipeline(config, features=features)
        assert results["rows"] == [0, -1, -1]
        assert results["n_unplaced"] == 2

    def test_interactions(self, config):
        interaction = GenomeInteraction(ChromosomeInterval("chr1", 0, 10), ChromosomeInterval("chr2", 0, 10))
        results = run_layout_pipeline(config, interactions=[interaction])
        assert results["n_interactions"] == 1

    def test_view_window(self, config):
        config["view"].update({"start": 150, "end": 200})
        results = run_layout_pipeline(config)
        assert [p.feature.name for p in results["placements"]] == ["b"]

    def test_writes_output(self, config, tmp_path):
        results = run_layout_pipeline(config, output_path=tmp_path / "placements.tsv")
        assert results["output_file"].exists()

    def test_invalid_configuration(self, config):
        config["context"]["regions"].append({"name": "bad", "chr": "chr1", "start": 5, "end": 1})
        with pytest.raises(ValidationError):
            run_layout_pipeline(config)

    def test_null_width_rejected(self, config):
        config["view"]["width"] = None
        with pytest.raises(ValidationError):
            run_layout_pipeline(config)
