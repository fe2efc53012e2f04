"""
Claim State Machine

Validates claim status transitions and knows which actor may act on a claim.
"""
import logging
from typing import Dict, List, Set

from claimledger.core.errors import ValidationError
from claimledger.core.models import Claim
from claimledger.core.states import ClaimStatus

logger = logging.getLogger(__name__)


class ClaimStateMachine:
    """
    State machine for claim statuses.

    Damage claims are settled by the insurer straight from NEW. Theft claims
    pass the police first, who confirm or reject them; the insurer then settles
    a confirmed theft, never by repair.
    """

    DAMAGE_TRANSITIONS: Dict[ClaimStatus, Set[ClaimStatus]] = {
        ClaimStatus.NEW: {ClaimStatus.REPAIR, ClaimStatus.REIMBURSEMENT, ClaimStatus.REJECTED},
    }

    THEFT_TRANSITIONS: Dict[ClaimStatus, Set[ClaimStatus]] = {
        ClaimStatus.NEW: {ClaimStatus.THEFT_CONFIRMED, ClaimStatus.REJECTED},
        ClaimStatus.THEFT_CONFIRMED: {ClaimStatus.REIMBURSEMENT, ClaimStatus.REJECTED},
    }

    def get_valid_transitions(self, claim: Claim) -> List[ClaimStatus]:
        table = self.THEFT_TRANSITIONS if claim.is_theft else self.DAMAGE_TRANSITIONS
        return sorted(table.get(claim.status, set()), key=lambda s: s.name)

    def can_transition(self, claim: Claim, target: ClaimStatus) -> bool:
        return target in self.get_valid_transitions(claim)

    def awaiting_insurer(self, claim: Claim) -> bool:
        """A claim the insurer may settle: new damage, or confirmed theft."""
        if claim.is_theft:
            return claim.status == ClaimStatus.THEFT_CONFIRMED
        return claim.status == ClaimStatus.NEW

    def awaiting_police(self, claim: Claim) -> bool:
        return claim.is_theft and claim.status == ClaimStatus.NEW

    def transition(self, claim: Claim, target: ClaimStatus) -> Claim:
        """
        Move the claim to `target`.

        Raises:
            ValidationError: If the transition is not valid
        """
        if not self.can_transition(claim, target):
            valid = [s.name for s in self.get_valid_transitions(claim)]
            raise ValidationError(
                f"Invalid transition from {claim.status.name} to {target.name}. "
                f"Valid transitions: {valid}"
            )
        logger.info(f"Claim status {claim.status.name} -> {target.name}")
        claim.status = target
        return claim


state_machine = ClaimStateMachine()
