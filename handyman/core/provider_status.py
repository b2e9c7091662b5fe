"""Provider verification lifecycle.

A user becomes an *applicant* the moment they ask to become a provider. Every
submission (first or repeated) lands in ``pending`` and clears verification;
only an admin approval moves a provider to ``active`` and verified.

    applicant --submit--> pending --approve--> active
    pending|active --reject--> inactive --approve--> active
    active --suspend--> suspended --reinstate--> active
    any --submit--> pending
"""

from typing import Optional

from handyman.schemas.provider import ProviderApplication, ProviderProfile

APPLICANT = "applicant"
PENDING = "pending"
ACTIVE = "active"
INACTIVE = "inactive"
SUSPENDED = "suspended"

# event -> {from_state: to_state}; "submit" is accepted from every state
TRANSITIONS = {
    "approve": {PENDING: ACTIVE, INACTIVE: ACTIVE},
    "reject": {PENDING: INACTIVE, ACTIVE: INACTIVE},
    "suspend": {ACTIVE: SUSPENDED},
    "reinstate": {SUSPENDED: ACTIVE},
}


class InvalidTransition(Exception):
    def __init__(self, event: str, state: str):
        self.event = event
        self.state = state
        super().__init__(f"Cannot {event} a provider in state '{state}'")


def current_state(profile: Optional[dict]) -> str:
    if not profile:
        return APPLICANT
    return profile.get("status") or PENDING


def submit(application: ProviderApplication) -> ProviderProfile:
    """Build a brand new profile from an application.

    The previous profile is discarded entirely: metrics, rating and job counts
    restart at zero and verification is cleared.
    """
    data = application.model_dump(by_alias=True)
    if application.provider_type != "company":
        data["employeeCount"] = None
    return ProviderProfile.model_validate(
        {**data, "status": PENDING, "is_verified": False}
    )


def transition(profile: dict, event: str) -> ProviderProfile:
    """Apply an admin decision to a stored profile and return the new profile."""
    state = current_state(profile)
    targets = TRANSITIONS.get(event)
    if targets is None or state not in targets:
        raise InvalidTransition(event, state)

    new_state = targets[state]
    updated = ProviderProfile.model_validate(profile)
    return updated.model_copy(update={"status": new_state, "is_verified": new_state == ACTIVE})
