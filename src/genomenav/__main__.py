"""Allow running as ``python -m genomenav``."""

from genomenav.main import cli

cli()
