"""Command line interface for GenomeNav."""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from genomenav import __version__
from genomenav.utils.config import (
    load_configuration, create_default_configuration, save_configuration, build_navigation_context
)
from genomenav.core.exceptions import GenomeNavError
from genomenav.modules.navigation_context import NavigationContext


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the GenomeNav CLI."""
    parser = argparse.ArgumentParser(
        prog='genomenav',
        description='GenomeNav: navigation-context coordinates and row layout for genome views',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate config template
  genomenav --init-config context.yaml

  # Resolve a locus or feature name to context coordinates
  genomenav context.yaml --locate chr1:100-200

  # List features and genomic loci under a context range
  genomenav context.yaml --features 0 5000
  genomenav context.yaml --loci 0 5000

  # Lay out the configured view and write a placement table
  genomenav context.yaml --output placements.tsv
        """.strip()
    )

    parser.add_argument('config', nargs='?', type=Path,
                        help='Configuration file (YAML or JSON) describing the navigation context')

    special_group = parser.add_argument_group('Special modes')
    special_group.add_argument('--init-config', type=Path, metavar='FILE',
                               help='Create default configuration file and exit')

    query_group = parser.add_argument_group('Coordinate queries')
    query_group.add_argument('--locate', type=str, metavar='TEXT',
                             help='Parse "chr:start-end" or a feature name into context coordinates')
    query_group.add_argument('--features', type=int, nargs=2, metavar=('START', 'END'),
                             help='List feature segments overlapping a context range')
    query_group.add_argument('--loci', type=int, nargs=2, metavar=('START', 'END'),
                             help='List merged genomic loci under a context range')
    query_group.add_argument('--gapless', type=int, metavar='BASE',
                             help='Convert a context coordinate to its gapless coordinate')

    layout_group = parser.add_argument_group('Layout parameters')
    layout_group.add_argument('--view', type=int, nargs=2, metavar=('START', 'END'),
                              help='View region in context coordinates (default: whole context)')
    layout_group.add_argument('--width', type=float, metavar='PX',
                              help='Pixel width of the visualization (default: 1000)')
    layout_group.add_argument('--num-rows', type=int, metavar='INT',
                              help='Maximum number of display rows (default: 10)')
    layout_group.add_argument('--padding', type=float, metavar='PX',
                              help='Horizontal padding around each interval in pixels (default: 0)')
    layout_group.add_argument('--output', '-o', type=Path,
                              help='Write the placement table to this file (.tsv or .csv)')
    layout_group.add_argument('--compress-output', action='store_true',
                              help='Gzip the placement table')

    core_group = parser.add_argument_group('Core options')
    core_group.add_argument('--verbose', '-v', action='store_true',
                            help='Enable verbose output')
    core_group.add_argument(
        '--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], default='WARNING',
        help='Logging verbosity level (default: WARNING)')

    parser.add_argument('--version', action='version', version=f'GenomeNav {__version__}')

    return parser


def cli(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        if args.init_config:
            _handle_init_config(args.init_config)
            return

        if args.config:
            if not args.config.exists():
                print(f"Error: Configuration file does not exist: {args.config}", file=sys.stderr)
                sys.exit(1)
            config = load_configuration(args.config)
            if args.verbose:
                print(f"Loaded configuration from {args.config}")
        else:
            config = create_default_configuration()
            if args.verbose:
                print("Using default configuration")

        _apply_cli_overrides(config, {
            'view': args.view,
            'width': args.width,
            'num_rows': args.num_rows,
            'padding': args.padding,
            'compress_output': args.compress_output
        })

        if args.locate or args.features or args.loci or args.gapless is not None:
            nav_context = build_navigation_context(config)
            _handle_queries(nav_context, args)
            return

        from genomenav.pipeline import run_layout_pipeline

        results = run_layout_pipeline(
            config=config,
            output_path=args.output,
            log_level=args.log_level
        )

        print(f"Context \"{results['context_name']}\": {results['total_bases']} bases")
        print(f"View: {results['view']}")
        print(f"Placed {results['n_placements']} of {results['n_features']} features "
              f"in {results['n_rows_used']} rows")
        if results['n_unplaced']:
            print(f"  {results['n_unplaced']} placements did not fit")
        if 'output_file' in results:
            print(f"Placement table written to {results['output_file']}")

    except GenomeNavError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


def _handle_init_config(output_path: Path) -> None:
    """Handle --init-config mode."""
    try:
        config = create_default_configuration()
        save_configuration(config, output_path)
        print(f"Created default configuration: {output_path}")
    except Exception as e:
        print(f"Error creating configuration: {e}", file=sys.stderr)
        sys.exit(1)


def _handle_queries(nav_context: NavigationContext, args: argparse.Namespace) -> None:
    """Answer coordinate queries against a navigation context."""
    if args.locate:
        print(f"{args.locate}\t{nav_context.parse(args.locate)}")

    if args.features:
        for segment in nav_context.get_features_in_interval(*args.features):
            kind = "gap" if segment.feature.is_gap else str(segment.get_locus())
            print(f"{segment}\t{kind}")

    if args.loci:
        for locus in nav_context.get_loci_in_interval(*args.loci):
            print(locus)

    if args.gapless is not None:
        print(f"{args.gapless}\t{nav_context.to_gapless_coordinate(args.gapless)}")


def _apply_cli_overrides(config: Dict[str, Any], cli_params: Dict[str, Any]) -> None:
    """Apply CLI parameter overrides to configuration."""

    # View parameters
    if cli_params['view'] is not None:
        start, end = cli_params['view']
        config.setdefault('view', {}).update({'start': start, 'end': end})
    if cli_params['width'] is not None:
        config.setdefault('view', {})['width'] = cli_params['width']

    # Layout parameters
    if cli_params['num_rows'] is not None:
        config.setdefault('layout', {})['num_rows'] = cli_params['num_rows']
    if cli_params['padding'] is not None:
        config.setdefault('layout', {})['padding'] = cli_params['padding']

    # Output parameters
    if cli_params['compress_output']:
        config.setdefault('output', {})['compress'] = True


if __name__ == '__main__':
    cli()
