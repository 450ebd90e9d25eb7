"""
Core DNS management functionality.

This package contains the record model and the reconciliation logic.
"""

from .dns_manager import DNSManager
from .record_manager import RecordManager, ReconcileStrategy

__all__ = ["DNSManager", "RecordManager", "ReconcileStrategy"]
