"""Quality validation stage.

This package runs advisory invariant checks over the cleansed and
dimensional layers and reports the offending rows per check.
"""
