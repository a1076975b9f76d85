"""fwbuild - multi-architecture framework builder.

Compiles library targets with xcodebuild, merges the per-platform slices
into one xcframework and keeps finished artifacts in a versioned cache.
"""

__version__ = "0.1.0"
