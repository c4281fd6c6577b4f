"""
GCP Services Package

Exports the Google Cloud adapters used by the pipeline.
"""

from receptionist.services.gcp.translate import GCPTranslationService

__all__ = [
    "GCPTranslationService",
]
