"""Pipeline orchestration.

This package runs the raw, cleansed, dimensional, and quality stages
with replace-on-success layer writes and run log bookkeeping.
"""
