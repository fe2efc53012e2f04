"""Tests for repair order fulfillment and its propagation to claims."""
import json
import logging

import pytest

from claimledger.core.models import Claim, Item, RepairOrder
from claimledger.core.states import ClaimStatus
from claimledger.dispatcher import OperationDispatcher
from claimledger.ledger.keys import build_key
from claimledger.ledger.store import EntityStore
from tests.conftest import call


@pytest.fixture
def seeded(ledger):
    """Repair order r1 linked to claim (k1, c1), plus an already completed r0."""
    with ledger.transaction() as tx:
        store = EntityStore(tx)
        store.put(RepairOrder(claim_uuid="c1", contract_uuid="k1", item=Item(brand="Canyon"), ready=False), ["r1"])
        store.put(RepairOrder(claim_uuid="c0", contract_uuid="k1", ready=True), ["r0"])
        store.put(Claim(contract_uuid="k1", status=ClaimStatus.REPAIR, repaired=False), ["k1", "c1"])
    return ledger


def stored_claim(ledger, contract_uuid, claim_uuid):
    raw = ledger.get_state(build_key("claim", [contract_uuid, claim_uuid]))
    return json.loads(raw) if raw else None


class TestListRepairOrders:
    def test_only_pending_orders(self, dispatcher: OperationDispatcher, seeded):
        orders = call(dispatcher, "repair_order_ls").result()
        assert [o["uuid"] for o in orders] == ["r1"]
        assert set(orders[0]) == {"uuid", "claim_uuid", "contract_uuid", "item"}
        assert orders[0]["item"]["brand"] == "Canyon"

    def test_empty_store(self, dispatcher: OperationDispatcher):
        assert call(dispatcher, "repair_order_ls").result() == []


class TestCompleteRepairOrder:
    def test_completes_order_and_marks_claim_repaired(self, dispatcher: OperationDispatcher, seeded):
        response = call(dispatcher, "repair_order_complete", {"uuid": "r1"})
        assert response.ok
        assert response.payload == b""
        assert call(dispatcher, "repair_order_ls").result() == []
        assert stored_claim(seeded, "k1", "c1")["repaired"] is True

    def test_second_completion_still_succeeds(self, dispatcher: OperationDispatcher, seeded):
        assert call(dispatcher, "repair_order_complete", {"uuid": "r1"}).ok
        assert call(dispatcher, "repair_order_complete", {"uuid": "r1"}).ok
        order = json.loads(seeded.get_state(build_key("repair_order", ["r1"])))
        assert order["ready"] is True

    def test_missing_claim_link_is_tolerated(self, dispatcher: OperationDispatcher, seeded):
        response = call(dispatcher, "repair_order_complete", {"uuid": "r0"})
        assert response.ok
        assert stored_claim(seeded, "k1", "c0") is None

    def test_missing_repair_order(self, dispatcher: OperationDispatcher):
        response = call(dispatcher, "repair_order_complete", {"uuid": "missing"})
        assert not response.ok
        assert response.kind == "NotFound"
        assert response.message == "Could not find the repair order"

    def test_wrong_argument_count(self, dispatcher: OperationDispatcher):
        response = dispatcher.invoke("repair_order_complete", ['{"uuid": "r1"}', "{}"])
        assert response.message == "Invalid argument count."


class TestRepairWorkflow:
    def test_claim_to_repair_to_completion(self, dispatcher: OperationDispatcher, contract):
        call(dispatcher, "claim_file", {"uuid": "c1", "contract_uuid": "k1", "description": "Flat"})
        call(dispatcher, "claim_process", {"uuid": "c1", "contract_uuid": "k1", "status": "F"})
        assert call(dispatcher, "repair_order_complete", {"uuid": "c1"}).ok

        claim = call(dispatcher, "contract_ls").result()[0]["claims"][0]
        assert claim["repaired"] is True
        assert claim["status"] == "F"

    def test_completion_is_logged_with_transaction_id(self, dispatcher: OperationDispatcher, seeded, caplog):
        with caplog.at_level(logging.INFO, logger="claimledger.handlers.repair_shop"):
            call(dispatcher, "repair_order_complete", {"uuid": "r1"})
        tx_id = seeded.get_history_for_key(build_key("repair_order", ["r1"]))[-1].tx_id
        assert f"[tx {tx_id}] Repair order r1 completed" in caplog.text
