"""
Claim Filing & Processing (insurer)

Filing appends the claim to its contract's index in the same invocation.
Processing settles a claim and, for repairs, raises a repair order.
"""
import logging
from typing import Any, List

from claimledger.core.errors import DuplicateKey, NotFound, ValidationError
from claimledger.core.models import (
    Claim,
    ClaimFile,
    ClaimFilter,
    ClaimProcess,
    RepairOrder,
)
from claimledger.core.states import ClaimStatus
from claimledger.handlers.base import Invocation, find_contract, optional_arg, single_arg
from claimledger.state_machine.machine import state_machine

logger = logging.getLogger(__name__)


def list_claims(inv: Invocation, args: List[str]) -> List[Any]:
    query = optional_arg(args, ClaimFilter)

    results = []
    for (contract_uuid, uuid), claim in inv.store.list_keyed(Claim):
        if query.status != ClaimStatus.UNKNOWN and claim.status != query.status:
            continue
        results.append({"uuid": uuid, **claim.model_dump(mode="json"), "contract_uuid": contract_uuid})
    return results


def file_claim(inv: Invocation, args: List[str]) -> None:
    dto = single_arg(args, ClaimFile)

    found = find_contract(inv.store, dto.contract_uuid)
    if found is None:
        raise NotFound("Contract could not be found.")
    username, contract = found
    if contract.void:
        raise ValidationError("Contract is void.")
    if dto.uuid in contract.claim_index:
        raise DuplicateKey("Claim with this UUID already exists.")

    claim = Claim(
        contract_uuid=dto.contract_uuid,
        date=dto.date,
        description=dto.description,
        is_theft=dto.is_theft,
        status=ClaimStatus.NEW,
    )
    inv.store.put(claim, [dto.contract_uuid, dto.uuid])

    contract.claim_index.append(dto.uuid)
    inv.store.put(contract, [username, dto.contract_uuid])
    logger.info(f"[tx {inv.tx_id}] Filed claim {dto.uuid} against contract {dto.contract_uuid}")
    return None


def process_claim(inv: Invocation, args: List[str]) -> None:
    """
    Settle a claim awaiting the insurer.

    REPAIR raises a pending repair order for the contract's item. Reimbursing
    a theft voids the contract.
    """
    dto = single_arg(args, ClaimProcess)

    claim = inv.store.get(Claim, [dto.contract_uuid, dto.uuid], "Claim could not be found.")
    if not state_machine.awaiting_insurer(claim):
        raise ValidationError("Cannot change the status of a non-new claim.")
    if claim.is_theft and dto.status == ClaimStatus.REPAIR:
        raise ValidationError("Claim is marked as theft. Cannot repair it.")
    if dto.status not in (ClaimStatus.REPAIR, ClaimStatus.REIMBURSEMENT, ClaimStatus.REJECTED):
        raise ValidationError("Unknown status change.")

    state_machine.transition(claim, dto.status)
    logger.info(f"[tx {inv.tx_id}] Claim {dto.uuid} settled as {dto.status.name}")

    if dto.status == ClaimStatus.REPAIR:
        found = find_contract(inv.store, dto.contract_uuid)
        if found is None:
            raise NotFound("Contract could not be found.")
        _, contract = found
        repair_order = RepairOrder(
            claim_uuid=dto.uuid,
            contract_uuid=dto.contract_uuid,
            item=contract.item,
            ready=False,
        )
        inv.store.put(repair_order, [dto.uuid])
        claim.reimbursable = 0
        logger.info(f"[tx {inv.tx_id}] Raised repair order {dto.uuid} for contract {dto.contract_uuid}")
    elif dto.status == ClaimStatus.REIMBURSEMENT:
        claim.reimbursable = dto.reimbursable
        if claim.is_theft:
            found = find_contract(inv.store, dto.contract_uuid)
            if found is None:
                raise NotFound("Contract could not be found.")
            username, contract = found
            contract.void = True
            inv.store.put(contract, [username, dto.contract_uuid])
            logger.info(f"[tx {inv.tx_id}] Voided contract {dto.contract_uuid} after theft reimbursement")
    else:
        claim.reimbursable = 0

    inv.store.put(claim, [dto.contract_uuid, dto.uuid])
    return None
