# Core module - statuses, entities and errors
from .states import ClaimStatus
from .models import Claim, Contract, ContractType, Item, RepairOrder, User
from .errors import (
    DecodingError,
    DuplicateKey,
    EncodingError,
    LedgerError,
    NotFound,
    ReadError,
    ValidationError,
    WriteError,
)

__all__ = [
    "ClaimStatus",
    "Claim",
    "Contract",
    "ContractType",
    "Item",
    "RepairOrder",
    "User",
    "DecodingError",
    "DuplicateKey",
    "EncodingError",
    "LedgerError",
    "NotFound",
    "ReadError",
    "ValidationError",
    "WriteError",
]
