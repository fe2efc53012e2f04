"""
Ledger Entity Models

Defines the records stored on the ledger and the request payloads
accepted by the workflow operations.
"""
from datetime import datetime
from typing import ClassVar, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .states import ClaimStatus


class LedgerModel(BaseModel):
    """Base for everything decoded from a JSON argument or a ledger value."""
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)


class Entity(LedgerModel):
    """A record stored under a composite key whose first segment is `prefix`."""
    prefix: ClassVar[str] = ""


class Item(LedgerModel):
    """The insured good."""
    id: int = Field(default=0, description="Shop-local item identifier")
    brand: str = ""
    model: str = ""
    price: float = 0.0
    description: str = ""
    serial_no: str = ""


class ContractType(Entity):
    """Terms of an insurance product offered by the insurer."""
    prefix: ClassVar[str] = "contract_type"

    shop_type: str = Field(default="", description="Kind of shop selling this product")
    formula_per_day: str = Field(default="", description="Premium formula, evaluated by the shop")
    max_sum_insured: float = 0.0
    theft_insured: bool = False
    description: str = ""
    conditions: str = ""
    active: bool = False
    min_duration_days: int = 0
    max_duration_days: int = 0


class User(Entity):
    prefix: ClassVar[str] = "user"

    username: str = ""
    password: str = ""
    first_name: str = ""
    last_name: str = ""


class Contract(Entity):
    """
    A policy bought by a user, keyed by (username, contract uuid).

    `claim_index` lists the claims filed against this contract in filing order.
    """
    prefix: ClassVar[str] = "contract"

    username: str = ""
    item: Item = Field(default_factory=Item)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    void: bool = Field(default=False, description="Terminal; a void contract accepts no claims")
    contract_type_uuid: str = ""
    claim_index: List[str] = Field(default_factory=list)


class Claim(Entity):
    """A damage or theft claim, keyed by (contract uuid, claim uuid)."""
    prefix: ClassVar[str] = "claim"

    contract_uuid: str = ""
    date: Optional[datetime] = None
    description: str = ""
    is_theft: bool = False
    status: ClaimStatus = ClaimStatus.UNKNOWN
    reimbursable: float = 0.0
    repaired: bool = False
    file_reference: str = Field(default="", description="Police file reference for theft claims")

    @field_validator("status", mode="before")
    @classmethod
    def _decode_status(cls, value):
        return ClaimStatus(value)


class RepairOrder(Entity):
    """Work order for the repair shop, keyed by the uuid of the claim that raised it."""
    prefix: ClassVar[str] = "repair_order"

    claim_uuid: str = ""
    contract_uuid: str = ""
    item: Item = Field(default_factory=Item)
    ready: bool = False


# ============================================
# REQUEST PAYLOADS
# ============================================

class UUIDRequest(LedgerModel):
    uuid: str = ""


class ContractTypeRecord(ContractType):
    """A contract type together with its key, as used by bootstrap and create."""
    uuid: str = ""

    def to_entity(self) -> ContractType:
        return ContractType(**self.model_dump(exclude={"uuid"}))


class ContractTypeFilter(LedgerModel):
    shop_type: str = ""


class SetActiveRequest(LedgerModel):
    uuid: str = ""
    active: bool = False


class ContractCreate(LedgerModel):
    """Request model for issuing a contract, optionally onboarding its user."""
    uuid: str = ""
    contract_type_uuid: str = ""
    username: str = ""
    password: str = ""
    first_name: str = ""
    last_name: str = ""
    item: Item = Field(default_factory=Item)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class UsernameFilter(LedgerModel):
    username: str = ""


class Credentials(LedgerModel):
    username: str = ""
    password: str = ""


class ClaimFile(LedgerModel):
    uuid: str = ""
    contract_uuid: str = ""
    date: Optional[datetime] = None
    description: str = ""
    is_theft: bool = False


class ClaimFilter(LedgerModel):
    status: ClaimStatus = ClaimStatus.UNKNOWN

    @field_validator("status", mode="before")
    @classmethod
    def _decode_status(cls, value):
        return ClaimStatus(value)


class ClaimProcess(LedgerModel):
    uuid: str = ""
    contract_uuid: str = ""
    status: ClaimStatus = ClaimStatus.UNKNOWN
    reimbursable: float = 0.0

    @field_validator("status", mode="before")
    @classmethod
    def _decode_status(cls, value):
        return ClaimStatus(value)


class TheftClaimProcess(LedgerModel):
    uuid: str = ""
    contract_uuid: str = ""
    is_theft: bool = False
    file_reference: str = ""
