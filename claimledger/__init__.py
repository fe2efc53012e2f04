"""Multi-party insurance workflow engine over a composite-key ledger."""

__version__ = "1.0.0"
