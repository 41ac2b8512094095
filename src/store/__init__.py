"""Layer persistence and SDK.

This package stores raw, cleansed, and dimensional snapshots.
It also exposes the run log and the high-level warehouse client.
"""
