"""
Directory provider implementations.

This package contains the Directory interface, the Cloudflare API
provider and an in-memory provider for tests and offline use.
"""

from .base_provider import DirectoryProvider
from .cloudflare_provider import CloudflareDirectory
from .dns_client import DirectoryClient, DirectoryHandle
from .memory_provider import MemoryDirectory

__all__ = [
    "DirectoryProvider",
    "CloudflareDirectory",
    "DirectoryClient",
    "DirectoryHandle",
    "MemoryDirectory",
]
