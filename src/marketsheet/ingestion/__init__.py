"""Gamma API ingestion."""
