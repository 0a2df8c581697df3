"""Infrastructure adapters: database, ledger store, settings and logging."""
