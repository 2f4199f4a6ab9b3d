"""
Shelf Archive

Personal bookshelf archive: shelf reconciliation with orphan recovery,
fuzzy author/title matching, tri-state trope filtering and vendor link
normalization.
"""

__version__ = "0.1.0"
