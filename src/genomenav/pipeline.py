"""Layout orchestration: context, view, placement and row arrangement."""

import logging
import time
from pathlib import Path
from typing import Dict, Any, Iterable, Optional, Literal, Union

from genomenav.core.exceptions import ValidationError
from genomenav.core.feature import Feature, GenomeInteraction
from genomenav.utils.config import build_navigation_context, validate_configuration_schema
from genomenav.modules.drawing import DisplayedRegion, LinearDrawingModel
from genomenav.modules.feature_placer import FeaturePlacer
from genomenav.modules.interval_arranger import IntervalArranger, get_num_rows_used
from genomenav.modules.output import placements_to_dataframe, write_placements


def run_layout_pipeline(
    config: Dict[str, Any],
    features: Optional[Iterable[Feature]] = None,
    interactions: Optional[Iterable[GenomeInteraction]] = None,
    output_path: Optional[Union[str, Path]] = None,
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
) -> Dict[str, Any]:
    """
    Place features in the configured view and pack them into rows.

    Args:
        config: Complete configuration dictionary
        features: Features to place; defaults to the context's own non-gap regions
        interactions: Optional interactions to place
        output_path: Optional path of a placement table to write
        log_level: Logging verbosity level

    Returns:
        Dictionary containing placements, row indices and summary counts
    """
    setup_logging(log_level, config.get("logging", {}).get("file"))
    logger = logging.getLogger(__name__)

    start_time = time.time()

    validation_result = validate_configuration_schema(config)
    if not validation_result.is_valid:
        raise ValidationError(
            f"Configuration validation failed: {validation_result.errors}",
            errors=validation_result.errors,
            stage="validation"
        )

    nav_context = build_navigation_context(config)
    view_config = config.get("view", {})
    view_region = DisplayedRegion(nav_context, view_config.get("start", 0) or 0, view_config.get("end"))
    width = view_config.get("width", 1000)
    logger.info(f"Built {nav_context!r}; viewing {view_region!r} at {width}px")

    if features is None:
        features = [feature for feature in nav_context.get_features() if not feature.is_gap]
    features = list(features)

    placer = FeaturePlacer()
    placements = placer.place_features(features, view_region, width)

    layout_config = config.get("layout", {})
    padding = layout_config.get("padding", 0)
    arranger = IntervalArranger(
        LinearDrawingModel(view_region, width),
        num_rows=layout_config.get("num_rows", 10),
        get_padding=lambda interval: padding
    )
    rows = arranger.arrange([placement.context_location for placement in placements])

    placed_interactions = placer.place_interactions(interactions or [], view_region, width)

    results = {
        "context_name": nav_context.get_name(),
        "total_bases": nav_context.get_total_bases(),
        "view": view_region.get_context_coordinates(),
        "n_features": len(features),
        "n_placements": len(placements),
        "n_rows_used": get_num_rows_used(rows),
        "n_unplaced": rows.count(-1),
        "n_interactions": len(placed_interactions),
        "placements": placements,
        "rows": rows,
        "interactions": placed_interactions
    }

    if output_path is not None:
        table = placements_to_dataframe(placements, rows)
        results["output_file"] = write_placements(
            table, output_path, compress_output=config.get("output", {}).get("compress", False)
        )

    results["runtime_seconds"] = time.time() - start_time
    logger.info(
        f"Placed {results['n_placements']} of {results['n_features']} features in "
        f"{results['n_rows_used']} rows ({results['n_unplaced']} did not fit)"
    )
    return results


def setup_logging(level: str, log_file: Optional[Union[str, Path]] = None) -> None:
    """
    Setup logging configuration.

    Args:
        level: Logging level
        log_file: Optional log file path
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_file) if log_file else logging.NullHandler()
        ]
    )
