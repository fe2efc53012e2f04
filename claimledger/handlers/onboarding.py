"""
Contract & User Onboarding (shop, insurer)

Shops issue contracts and onboard their customers; the insurer lists
contracts and authenticates users.
"""
import logging
from typing import Any, Dict, List, Optional

from claimledger.core.errors import ValidationError
from claimledger.core.models import (
    Claim,
    Contract,
    ContractCreate,
    Credentials,
    User,
    UsernameFilter,
)
from claimledger.handlers.base import Invocation, optional_arg, single_arg

logger = logging.getLogger(__name__)


def create_contract(inv: Invocation, args: List[str]) -> Optional[Dict[str, str]]:
    """
    Issue a contract for a user.

    With both username and password the user is created if absent, and the
    stored credentials are returned. Otherwise the user must already exist and
    the payload is empty.
    """
    dto = single_arg(args, ContractCreate)

    request_user_create = bool(dto.username) and bool(dto.password)
    user = inv.store.find(User, [dto.username])
    if request_user_create:
        if user is None:
            user = User(
                username=dto.username,
                password=dto.password,
                first_name=dto.first_name,
                last_name=dto.last_name,
            )
            inv.store.put(user, [dto.username])
            logger.info(f"Onboarded new user {dto.username}")
    elif user is None:
        raise ValidationError("User with this username does not exist.")

    contract = Contract(
        username=dto.username,
        contract_type_uuid=dto.contract_type_uuid,
        item=dto.item,
        start_date=dto.start_date,
        end_date=dto.end_date,
        void=False,
        claim_index=[],
    )
    inv.store.put(contract, [dto.username, dto.uuid])
    logger.info(f"Issued contract {dto.uuid} to {dto.username}")

    if not request_user_create:
        return None
    return {"username": user.username, "password": user.password}


def create_user(inv: Invocation, args: List[str]) -> Optional[Dict[str, str]]:
    """
    Get-or-create a user.

    Returns an empty payload when the user is new, otherwise the credentials
    already stored under that username.
    """
    user = single_arg(args, User)
    existing = inv.store.find(User, [user.username])
    if existing is None:
        inv.store.put(user, [user.username])
        logger.info(f"Created user {user.username}")
        return None
    return {"username": existing.username, "password": existing.password}


def list_contracts(inv: Invocation, args: List[str]) -> List[Any]:
    """List contracts, all or one user's, each with its claims resolved."""
    query = optional_arg(args, UsernameFilter)
    attr_prefix = [query.username] if query.username else []

    results = []
    for uuid, contract in inv.store.list(Contract, attr_prefix):
        claims = []
        for claim_uuid in contract.claim_index:
            claim = inv.store.find(Claim, [uuid, claim_uuid])
            if claim is not None:
                claims.append({"uuid": claim_uuid, **claim.model_dump(mode="json")})
        results.append({"uuid": uuid, **contract.model_dump(mode="json"), "claims": claims})
    return results


def authenticate_user(inv: Invocation, args: List[str]) -> bool:
    credentials = single_arg(args, Credentials)
    user = inv.store.find(User, [credentials.username])
    return user is not None and user.password == credentials.password


def get_user(inv: Invocation, args: List[str]) -> Dict[str, str]:
    query = single_arg(args, UsernameFilter)
    user = inv.store.get(User, [query.username], "Could not find user")
    return {
        "username": user.username,
        "first_name": user.first_name,
        "last_name": user.last_name,
    }
