"""
Theft Claim Investigation (police)
"""
import logging
from typing import Any, List

from claimledger.core.errors import ValidationError
from claimledger.core.models import Claim, Item, TheftClaimProcess, User
from claimledger.core.states import ClaimStatus
from claimledger.handlers.base import Invocation, find_contract, single_arg
from claimledger.state_machine.machine import state_machine

logger = logging.getLogger(__name__)


def list_theft_claims(inv: Invocation, args: List[str]) -> List[Any]:
    """Theft claims still awaiting a police decision, with the stolen item and owner."""
    results = []
    for (contract_uuid, uuid), claim in inv.store.list_keyed(Claim):
        if not state_machine.awaiting_police(claim):
            continue

        item, name = Item(), ""
        found = find_contract(inv.store, contract_uuid)
        if found is not None:
            username, contract = found
            item = contract.item
            user = inv.store.find(User, [username])
            if user is not None:
                name = f"{user.first_name} {user.last_name}".strip()

        results.append({
            "uuid": uuid,
            "contract_uuid": contract_uuid,
            "item": item.model_dump(mode="json"),
            "description": claim.description,
            "name": name,
        })
    return results


def process_theft_claim(inv: Invocation, args: List[str]) -> None:
    dto = single_arg(args, TheftClaimProcess)

    claim = inv.store.get(Claim, [dto.contract_uuid, dto.uuid], "Claim could not be found.")
    if not state_machine.awaiting_police(claim):
        raise ValidationError("Claim is either not related to theft, or has invalid status.")

    target = ClaimStatus.THEFT_CONFIRMED if dto.is_theft else ClaimStatus.REJECTED
    state_machine.transition(claim, target)
    claim.file_reference = dto.file_reference
    logger.info(f"[tx {inv.tx_id}] Theft claim {dto.uuid} decided as {target.name}")
    inv.store.put(claim, [dto.contract_uuid, dto.uuid])
    return None
