"""CLI interface for the mt940check statement payload validator.

This package provides command-line access to payload validation, batch
validation with tabular summaries, and inspection of the configured rules.
"""
