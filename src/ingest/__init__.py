"""Source ingestion into the raw layer.

This package reads the CRM and ERP CSV exports into typed raw rows.
It prepares a full raw snapshot for the layer store.
"""
