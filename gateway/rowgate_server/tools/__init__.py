"""
Developer tools for Rowgate.

- seed: create and populate a sample table
"""

from .seed import SAMPLE_ROWS, seed_database

__all__ = [
    "SAMPLE_ROWS",
    "seed_database",
]
