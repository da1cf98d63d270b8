"""Cloud Function Entry Point - Root Module.

This is the root-level entry point for Google Cloud Functions.
It imports from the afetnet package.
"""

from afetnet.main import earthquakes

__all__ = [
    "earthquakes",
]
