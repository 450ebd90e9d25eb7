"""
GoDaddy DNS Records Manager - Reconcile domain records with the GoDaddy API

Declared DNS records are compared against the registrar's remote state
and written back through a rate-limited API client.
"""

__version__ = "1.0.0"
__author__ = "GoDaddy DNS Records Manager Team"
__description__ = "Reconcile GoDaddy-hosted DNS records with a declared record set"

from .core.dns_manager import DNSManager
from .core.record_manager import RecordManager
from .providers.dns_client import DNSClient

__all__ = [
    "DNSManager",
    "RecordManager",
    "DNSClient",
]
