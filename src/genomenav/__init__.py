"""
GenomeNav

Coordinate mapping and row layout for linear genome views: genomic loci, navigation
context coordinates and pixels.
"""

__version__ = "1.0.0"
__author__ = "GenomeNav Team"
