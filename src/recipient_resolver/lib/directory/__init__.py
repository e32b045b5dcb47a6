"""Directory library — remote account name search.

Public API:
    - BaseDirectory: Abstract directory interface
    - BackendDirectory: Wallet backend HTTP provider
    - DirectoryMatch: One search match
    - AccountDescription: Display info for one account
    - DirectoryProviderError: Transport/service failure
"""

from recipient_resolver.lib.directory.backend import BackendDirectory
from recipient_resolver.lib.directory.base import (
    AccountDescription,
    BaseDirectory,
    DirectoryMatch,
    DirectoryProviderError,
)

__all__ = [
    "AccountDescription",
    "BackendDirectory",
    "BaseDirectory",
    "DirectoryMatch",
    "DirectoryProviderError",
]
