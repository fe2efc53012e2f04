"""
Handler Plumbing

Argument decoding and lookups shared by the workflow handlers.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from claimledger.config.settings import Settings
from claimledger.core.errors import DecodingError, ValidationError
from claimledger.core.models import Contract
from claimledger.ledger.store import EntityStore

M = TypeVar("M", bound=BaseModel)


@dataclass
class Invocation:
    """Everything a handler may touch during one invocation."""
    store: EntityStore
    settings: Settings
    tx_id: str = ""


def decode_arg(raw: str, model: Type[M]) -> M:
    try:
        return model.model_validate_json(raw)
    except PydanticValidationError as exc:
        raise DecodingError(str(exc)) from exc


def single_arg(args: List[str], model: Type[M]) -> M:
    """Decode the one JSON argument an operation requires."""
    if len(args) != 1:
        raise ValidationError("Invalid argument count.")
    return decode_arg(args[0], model)


def optional_arg(args: List[str], model: Type[M]) -> M:
    """Decode an optional filter argument; absent or blank means defaults."""
    if len(args) > 1:
        raise ValidationError("Invalid argument count.")
    if not args or not args[0].strip():
        return model()
    return decode_arg(args[0], model)


def find_contract(store: EntityStore, contract_uuid: str) -> Optional[Tuple[str, Contract]]:
    """
    Locate a contract by uuid alone.

    Contracts are keyed (username, uuid), so this scans the whole family.
    Returns (username, contract) or None.
    """
    for (username, uuid), contract in store.list_keyed(Contract):
        if uuid == contract_uuid:
            return username, contract
    return None
