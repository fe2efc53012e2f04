"""Tests for contract issuance and user onboarding."""
from claimledger.core.models import Contract, User
from claimledger.dispatcher import OperationDispatcher
from claimledger.ledger.keys import build_key, scan
from tests.conftest import ITEM, call


def _count(ledger, prefix):
    with ledger.transaction() as tx:
        return len(list(scan(tx, prefix)))


class TestCreateContract:
    def test_new_user_and_contract(self, dispatcher: OperationDispatcher, ledger):
        response = call(dispatcher, "contract_create", {
            "uuid": "k1", "username": "alice", "password": "secret",
            "first_name": "Alice", "last_name": "Smith", "item": ITEM,
        })
        assert response.result() == {"username": "alice", "password": "secret"}
        assert _count(ledger, User.prefix) == 1
        assert _count(ledger, Contract.prefix) == 1

    def test_existing_user_without_credentials(self, dispatcher: OperationDispatcher, contract, ledger):
        response = call(dispatcher, "contract_create", {"uuid": "k2", "username": "alice", "item": ITEM})
        assert response.ok
        assert response.payload == b""
        assert _count(ledger, User.prefix) == 1
        assert ledger.get_state(build_key("contract", ["alice", "k2"])) is not None

    def test_existing_user_with_credentials_returns_stored_ones(self, dispatcher: OperationDispatcher, contract):
        response = call(dispatcher, "contract_create", {
            "uuid": "k2", "username": "alice", "password": "other", "item": ITEM,
        })
        assert response.result() == {"username": "alice", "password": "secret"}

    def test_unknown_user_without_credentials(self, dispatcher: OperationDispatcher, ledger):
        response = call(dispatcher, "contract_create", {"uuid": "k1", "username": "ghost"})
        assert response.kind == "ValidationError"
        assert response.message == "User with this username does not exist."
        assert ledger.keys() == []

    def test_new_contract_is_not_void_and_has_no_claims(self, dispatcher: OperationDispatcher, contract):
        listed = call(dispatcher, "contract_ls", {"username": "alice"}).result()
        assert listed[0]["uuid"] == "k1"
        assert listed[0]["void"] is False
        assert listed[0]["claim_index"] == []
        assert listed[0]["claims"] == []

    def test_wrong_argument_count(self, dispatcher: OperationDispatcher):
        response = dispatcher.invoke("contract_create", [])
        assert response.message == "Invalid argument count."


class TestCreateUser:
    def test_get_or_create_is_idempotent(self, dispatcher: OperationDispatcher, ledger):
        user = {"username": "bob", "password": "pw", "first_name": "Bob", "last_name": "B"}
        first = call(dispatcher, "user_create", user)
        assert first.ok and first.payload == b""

        second = call(dispatcher, "user_create", {**user, "password": "changed"})
        third = call(dispatcher, "user_create", user)
        assert second.result() == {"username": "bob", "password": "pw"}
        assert third.result() == second.result()
        assert _count(ledger, User.prefix) == 1

    def test_malformed_json(self, dispatcher: OperationDispatcher):
        response = dispatcher.invoke("user_create", ["{"])
        assert response.kind == "DecodingError"


class TestUserQueries:
    def test_authenticate(self, dispatcher: OperationDispatcher, contract):
        assert call(dispatcher, "user_authenticate", {"username": "alice", "password": "secret"}).result() is True
        assert call(dispatcher, "user_authenticate", {"username": "alice", "password": "x"}).result() is False
        assert call(dispatcher, "user_authenticate", {"username": "nobody", "password": "x"}).result() is False

    def test_get_info_omits_password(self, dispatcher: OperationDispatcher, contract):
        info = call(dispatcher, "user_get_info", {"username": "alice"}).result()
        assert info == {"username": "alice", "first_name": "Alice", "last_name": "Smith"}

    def test_get_info_for_unknown_user(self, dispatcher: OperationDispatcher):
        response = call(dispatcher, "user_get_info", {"username": "nobody"})
        assert response.kind == "NotFound"
        assert response.message == "Could not find user"

    def test_non_finite_item_price_is_rejected(self, dispatcher: OperationDispatcher, ledger):
        response = call(dispatcher, "contract_create", {
            "uuid": "k1", "username": "alice", "password": "secret",
            "item": {**ITEM, "price": float("nan")},
        })
        assert response.kind == "DecodingError"
        assert ledger.keys() == []
        assert call(dispatcher, "contract_ls").result() == []
