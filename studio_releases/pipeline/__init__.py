"""
Releases extraction pipeline: fetch, locate rows, decompose fields.
"""

from .extractor import Extractor

__all__ = ['Extractor']
