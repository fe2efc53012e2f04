"""
Claim Status Definitions

Claim statuses travel as one-letter codes on the wire.
"""
from enum import Enum


class ClaimStatus(str, Enum):
    """
    Enum representing the possible statuses of an insurance claim.

    Damage: NEW -> REPAIR | REIMBURSEMENT | REJECTED
    Theft:  NEW -> THEFT_CONFIRMED | REJECTED, THEFT_CONFIRMED -> REIMBURSEMENT | REJECTED
    """
    UNKNOWN = ""
    NEW = "N"
    REJECTED = "R"
    REPAIR = "F"
    REIMBURSEMENT = "P"
    THEFT_CONFIRMED = "T"

    @classmethod
    def _missing_(cls, value):
        # Codes are case-insensitive, anything unrecognised is UNKNOWN
        if isinstance(value, str):
            for member in cls:
                if member.value == value.upper():
                    return member
        return cls.UNKNOWN
