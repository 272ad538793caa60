"""SVCS - a minimal single-user file version control system.

Tracks a flat set of files and stores content-addressed snapshots of
them on demand.
"""

__version__ = "1.0.0"
__author__ = "ain3sh"
