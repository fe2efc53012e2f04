# Workflow handlers, one module per actor-facing entity family
from .base import Invocation
from .claims import file_claim, list_claims, process_claim
from .contract_types import (
    bootstrap_contract_types,
    create_contract_type,
    list_contract_types,
    set_active_contract_type,
)
from .onboarding import authenticate_user, create_contract, create_user, get_user, list_contracts
from .police import list_theft_claims, process_theft_claim
from .repair_shop import complete_repair_order, list_repair_orders

__all__ = [
    "Invocation",
    "file_claim",
    "list_claims",
    "process_claim",
    "bootstrap_contract_types",
    "create_contract_type",
    "list_contract_types",
    "set_active_contract_type",
    "authenticate_user",
    "create_contract",
    "create_user",
    "get_user",
    "list_contracts",
    "list_theft_claims",
    "process_theft_claim",
    "complete_repair_order",
    "list_repair_orders",
]
