"""Artifact and header management for fwbuild.

This module handles the built-framework cache and the resolution of
aliased header trees.
"""

from .cache import CacheError, FrameworkCache
from .fs_utils import safe_rmtree
from .header_resolver import HeaderMapping, HeaderResolutionError, HeaderResolver

__all__ = [
    "CacheError",
    "FrameworkCache",
    "safe_rmtree",
    "HeaderMapping",
    "HeaderResolutionError",
    "HeaderResolver",
]
