"""
Meeting transcript providers.

Each provider lists candidate transcript ids for a configuration and
fetches one transcript as plain text.
"""

from workbench.boundary.http.providers.base import BaseTranscriptsProvider
from workbench.boundary.http.providers.gong import GongTranscriptsProvider
from workbench.boundary.http.providers.google_drive import GoogleDriveTranscriptsProvider

__all__ = [
    "BaseTranscriptsProvider",
    "GongTranscriptsProvider",
    "GoogleDriveTranscriptsProvider",
]
