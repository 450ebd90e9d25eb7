"""
Input parsers for desired DNS records.
"""

from .csv import CSVParser

__all__ = ["CSVParser"]
