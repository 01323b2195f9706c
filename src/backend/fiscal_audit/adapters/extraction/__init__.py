"""Adapters for the document extractor's JSON output (no I/O)."""

from .payload import ExtractionPayloadError, bundle_from_extraction

__all__ = [
    "ExtractionPayloadError",
    "bundle_from_extraction",
]
