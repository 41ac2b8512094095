"""Dimensional assembly stage.

This package joins cleansed entities into conformed dimensions and
the sales fact, assigning surrogate keys by stable total orders.
"""
