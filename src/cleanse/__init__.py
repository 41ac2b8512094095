"""Cleansing stage.

This package rewrites raw source rows into deduplicated, normalized
cleansed rows, one deterministic rule per source entity.
"""
