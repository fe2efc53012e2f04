"""
Repair Order Fulfillment (repair shop)
"""
import logging
from typing import Any, List

from claimledger.core.models import Claim, RepairOrder, UUIDRequest
from claimledger.handlers.base import Invocation, single_arg

logger = logging.getLogger(__name__)


def list_repair_orders(inv: Invocation, args: List[str]) -> List[Any]:
    """Pending repair orders only, in key order."""
    results = []
    for uuid, repair_order in inv.store.list(RepairOrder):
        if repair_order.ready:
            continue
        results.append({
            "uuid": uuid,
            "claim_uuid": repair_order.claim_uuid,
            "contract_uuid": repair_order.contract_uuid,
            "item": repair_order.item.model_dump(mode="json"),
        })
    return results


def complete_repair_order(inv: Invocation, args: List[str]) -> None:
    """
    Mark a repair order ready and flag its claim as repaired.

    The claim update is skipped when the order's claim link does not resolve;
    completion itself still succeeds.
    """
    request = single_arg(args, UUIDRequest)

    repair_order = inv.store.get(RepairOrder, [request.uuid], "Could not find the repair order")
    repair_order.ready = True
    inv.store.put(repair_order, [request.uuid])
    logger.info(f"[tx {inv.tx_id}] Repair order {request.uuid} completed")

    claim = inv.store.find(Claim, [repair_order.contract_uuid, repair_order.claim_uuid])
    if claim is None:
        logger.warning(
            f"Repair order {request.uuid} links to missing claim "
            f"{repair_order.contract_uuid}/{repair_order.claim_uuid}"
        )
        return None
    claim.repaired = True
    inv.store.put(claim, [repair_order.contract_uuid, repair_order.claim_uuid])
    return None
