"""Command-line entry points for the personal ledger."""
