"""mt940check: validation of SWIFT MT940 statement payloads."""

__version__ = "0.1.0"
