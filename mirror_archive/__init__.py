"""
Mirror Archive — Back up a repository as a compressed mirror clone.

Clones every ref of a repository with ``git clone --mirror``, bundles
the mirror with tar and compresses it with zstd, leaving
``repo.tar.zst`` for the calling workflow to upload or cache.
"""

__version__ = "1.0.0"
