"""
Input file parsers for bulk record operations.
"""

from .csv import CSVParser, load_record_file

__all__ = ["CSVParser", "load_record_file"]
