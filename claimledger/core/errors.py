"""
Ledger Error Kinds

Every handler-level failure is one of these. The dispatcher turns them
into an error response carrying both the kind and the message text.
"""


class LedgerError(Exception):
    """Base class for all failures surfaced by an invocation."""
    kind = "LedgerError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EncodingError(LedgerError):
    """A composite key could not be built or parsed."""
    kind = "EncodingError"


class DecodingError(LedgerError):
    """Input or stored JSON could not be decoded."""
    kind = "DecodingError"


class ValidationError(LedgerError):
    """Wrong argument count, bad transition, or a required entity is missing."""
    kind = "ValidationError"


class NotFound(LedgerError):
    kind = "NotFound"


class DuplicateKey(LedgerError):
    kind = "DuplicateKey"


class ReadError(LedgerError):
    kind = "ReadError"


class WriteError(LedgerError):
    kind = "WriteError"
