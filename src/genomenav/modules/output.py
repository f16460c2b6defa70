"""Tabular export of placement records."""

import gzip
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

import pandas as pd

from genomenav.modules.feature_placer import PlacedFeature, PlacedInteraction


logger = logging.getLogger(__name__)

PLACEMENT_COLUMNS = [
    "name", "chr", "locus_start", "locus_end", "strand",
    "context_start", "context_end", "x_start", "x_end", "row"
]

INTERACTION_COLUMNS = [
    "locus1", "locus2", "score", "x1_start", "x1_end", "x2_start", "x2_end", "key"
]


def placements_to_dataframe(
    placements: Sequence[PlacedFeature],
    rows: Optional[Sequence[int]] = None
) -> pd.DataFrame:
    """
    Tabulate feature placements.

    Args:
        placements: Placed features
        rows: Row index per placement, as returned by IntervalArranger.arrange

    Returns:
        DataFrame with one row per placement; the locus columns describe the
        visible part of the feature
    """
    if rows is not None and len(rows) != len(placements):
        raise ValueError(f"Got {len(rows)} row indices for {len(placements)} placements")

    records = []
    for i, placement in enumerate(placements):
        locus = placement.visible_part.get_locus()
        records.append({
            "name": placement.feature.name,
            "chr": locus.chr,
            "locus_start": locus.start,
            "locus_end": locus.end,
            "strand": placement.feature.strand,
            "context_start": placement.context_location.start,
            "context_end": placement.context_location.end,
            "x_start": placement.x_span.start,
            "x_end": placement.x_span.end,
            "row": rows[i] if rows is not None else -1
        })
    return pd.DataFrame(records, columns=PLACEMENT_COLUMNS)


def interactions_to_dataframe(placed_interactions: Sequence[PlacedInteraction]) -> pd.DataFrame:
    """Tabulate interaction placements."""
    records = [
        {
            "locus1": str(placed.interaction.locus1),
            "locus2": str(placed.interaction.locus2),
            "score": placed.interaction.score,
            "x1_start": placed.x_span1.start,
            "x1_end": placed.x_span1.end,
            "x2_start": placed.x_span2.start,
            "x2_end": placed.x_span2.end,
            "key": placed.generate_key()
        }
        for placed in placed_interactions
    ]
    return pd.DataFrame(records, columns=INTERACTION_COLUMNS)


def summarize_rows(table: pd.DataFrame) -> pd.DataFrame:
    """Placement count and pixel extent for each row; unplaced records are row -1."""
    if table.empty:
        return pd.DataFrame(columns=["row", "n_placements", "x_start", "x_end"])
    return (
        table.groupby("row")
        .agg(n_placements=("name", "size"), x_start=("x_start", "min"), x_end=("x_end", "max"))
        .reset_index()
    )


def write_placements(
    table: pd.DataFrame,
    output_file: Union[str, Path],
    compress_output: bool = False
) -> Path:
    """
    Write a placement table.

    Args:
        table: Table from placements_to_dataframe or interactions_to_dataframe
        output_file: Output path; ".csv" writes comma-separated, anything else tab-separated
        compress_output: Whether to gzip the output (".gz" is appended)

    Returns:
        Path to generated file
    """
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    sep = ',' if output_file.suffix.lower() == '.csv' else '\t'

    if compress_output:
        output_file = output_file.with_name(output_file.name + '.gz')
    open_func = gzip.open if compress_output else open

    with open_func(output_file, 'wt') as f:
        table.to_csv(f, sep=sep, index=False)

    logger.info(f"Wrote {len(table)} placements to {output_file}")
    return output_file


def read_placements(input_file: Union[str, Path]) -> pd.DataFrame:
    """Read a table written by write_placements."""
    input_file = Path(input_file)
    suffixes: List[str] = [s.lower() for s in input_file.suffixes]
    sep = ',' if '.csv' in suffixes else '\t'
    return pd.read_csv(input_file, sep=sep, keep_default_na=False)
