"""
Operation Dispatcher

Maps operation names to workflow handlers and runs each invocation as one
ledger transaction.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from claimledger import handlers
from claimledger.config.settings import Settings, settings as default_settings
from claimledger.core.errors import LedgerError, ValidationError
from claimledger.handlers.base import Invocation
from claimledger.ledger.store import EntityStore
from claimledger.ledger.stub import InMemoryLedger

logger = logging.getLogger(__name__)

Handler = Callable[[Invocation, List[str]], Any]

OK = 200
ERROR = 500

BOOTSTRAP_OPERATION = "init"


@dataclass
class Response:
    """
    Outcome of one invocation.

    `payload` holds the JSON-encoded result (empty for an empty success);
    failures carry the error kind alongside the message text.
    """
    status: int
    payload: bytes = b""
    message: str = ""
    kind: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == OK

    def result(self) -> Any:
        """Decoded payload, or None for an empty success."""
        return json.loads(self.payload) if self.payload else None


def success(result: Any = None) -> Response:
    if result is None:
        return Response(status=OK)
    return Response(status=OK, payload=json.dumps(result).encode("utf-8"))


def error(exc: LedgerError) -> Response:
    return Response(status=ERROR, message=exc.message, kind=exc.kind)


class OperationDispatcher:
    """
    Registry of handlers keyed by operation name.

    Every invocation runs inside one ledger transaction: its writes commit
    only if the handler returns.
    """

    def __init__(self, ledger: InMemoryLedger, settings: Optional[Settings] = None):
        self.ledger = ledger
        self.settings = settings or default_settings
        self._handlers: Dict[str, Handler] = {}

    def register(self, operation: str, handler: Handler) -> None:
        self._handlers[operation] = handler
        logger.debug(f"Registered handler for operation {operation}")

    @property
    def operations(self) -> List[str]:
        return sorted(self._handlers)

    def initialize(self, args: List[str]) -> Response:
        """Bootstrap entry point, run once at deployment to seed the catalog."""
        return self._run(BOOTSTRAP_OPERATION, handlers.bootstrap_contract_types, args)

    def invoke(self, operation: str, args: List[str]) -> Response:
        if operation == BOOTSTRAP_OPERATION:
            return self.initialize(args)
        handler = self._handlers.get(operation)
        if handler is None:
            logger.warning(f"Unknown operation {operation}")
            return error(ValidationError("Invalid invoke function."))
        return self._run(operation, handler, args)

    def _run(self, operation: str, handler: Handler, args: List[str]) -> Response:
        logger.info(f"Invoking {operation} with {len(args)} argument(s)")
        try:
            with self.ledger.transaction() as tx:
                result = handler(Invocation(EntityStore(tx), self.settings, tx.tx_id), args)
        except LedgerError as exc:
            logger.warning(f"{operation} failed: {exc.kind}: {exc.message}")
            return error(exc)
        return success(result)


def create_dispatcher(
    ledger: Optional[InMemoryLedger] = None, settings: Optional[Settings] = None
) -> OperationDispatcher:
    """Build a dispatcher with every workflow operation registered."""
    dispatcher = OperationDispatcher(ledger or InMemoryLedger(), settings)

    # Insurer
    dispatcher.register("contract_type_ls", handlers.list_contract_types)
    dispatcher.register("contract_type_create", handlers.create_contract_type)
    dispatcher.register("contract_type_set_active", handlers.set_active_contract_type)
    dispatcher.register("contract_ls", handlers.list_contracts)
    dispatcher.register("claim_ls", handlers.list_claims)
    dispatcher.register("claim_file", handlers.file_claim)
    dispatcher.register("claim_process", handlers.process_claim)
    dispatcher.register("user_authenticate", handlers.authenticate_user)
    dispatcher.register("user_get_info", handlers.get_user)

    # Shop
    dispatcher.register("contract_create", handlers.create_contract)
    dispatcher.register("user_create", handlers.create_user)

    # Repair shop
    dispatcher.register("repair_order_ls", handlers.list_repair_orders)
    dispatcher.register("repair_order_complete", handlers.complete_repair_order)

    # Police
    dispatcher.register("theft_claim_ls", handlers.list_theft_claims)
    dispatcher.register("theft_claim_process", handlers.process_theft_claim)

    return dispatcher
