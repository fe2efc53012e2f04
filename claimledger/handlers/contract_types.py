"""
Contract-Type Catalog (insurer)

Seeds the catalog once at deployment and keeps it editable afterwards.
"""
import logging
from typing import Any, List

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from claimledger.core.errors import DecodingError, DuplicateKey
from claimledger.core.models import (
    ContractType,
    ContractTypeFilter,
    ContractTypeRecord,
    SetActiveRequest,
)
from claimledger.handlers.base import Invocation, optional_arg, single_arg

logger = logging.getLogger(__name__)

_records = TypeAdapter(List[ContractTypeRecord])


def bootstrap_contract_types(inv: Invocation, args: List[str]) -> None:
    """
    Load a JSON array of {uuid, ...contract type} into the catalog.

    Any argument count other than one is a no-op, so deploying without
    seed data succeeds.
    """
    if len(args) != 1:
        return None
    try:
        records = _records.validate_json(args[0])
    except PydanticValidationError as exc:
        raise DecodingError(str(exc)) from exc
    for record in records:
        inv.store.put(record.to_entity(), [record.uuid])
    logger.info(f"Seeded {len(records)} contract type(s)")
    return None


def list_contract_types(inv: Invocation, args: List[str]) -> List[Any]:
    query = optional_arg(args, ContractTypeFilter)
    shop_type = query.shop_type.lower()

    results = []
    for uuid, contract_type in inv.store.list(ContractType):
        if shop_type and contract_type.shop_type.lower() != shop_type:
            continue
        results.append({"uuid": uuid, **contract_type.model_dump(mode="json")})
    return results


def create_contract_type(inv: Invocation, args: List[str]) -> None:
    record = single_arg(args, ContractTypeRecord)
    if inv.settings.strict_contract_types and inv.store.find(ContractType, [record.uuid]):
        raise DuplicateKey("Contract type with this UUID already exists.")
    inv.store.put(record.to_entity(), [record.uuid])
    logger.info(f"Stored contract type {record.uuid}")
    return None


def set_active_contract_type(inv: Invocation, args: List[str]) -> None:
    request = single_arg(args, SetActiveRequest)
    contract_type = inv.store.get(ContractType, [request.uuid], "Could not find contract type")
    contract_type.active = request.active
    inv.store.put(contract_type, [request.uuid])
    logger.info(f"Contract type {request.uuid} active={request.active}")
    return None
