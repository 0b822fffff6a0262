"""Adapters connecting the enrichment domain to external services."""
