"""
Utility functions and helpers.

This package contains the field validators for domain records.
"""

from .validators import validate_data, validate_name, validate_ttl

__all__ = ["validate_data", "validate_name", "validate_ttl"]
