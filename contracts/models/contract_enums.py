# contracts/models/contract_enums.py
from __future__ import annotations
from enum import Enum

_NEUTRAL = "#8E8E93"


class ContractStatus(str, Enum):
    """Lifecycle status; each member carries its badge colour."""
    ACTIVE = "Active"
    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @property
    def color(self) -> str:
        return _STATUS_COLORS[self]


_STATUS_COLORS = {
    ContractStatus.ACTIVE: "#34C759",      # green
    ContractStatus.PENDING: "#FF9500",     # orange
    ContractStatus.COMPLETED: "#007AFF",   # blue
    ContractStatus.CANCELLED: "#FF3B30",   # red
}


class ContractType(str, Enum):
    EMPLOYMENT = "Employment"
    RENTAL = "Rental"
    SERVICE = "Service"
    PURCHASE = "Purchase"
    PARTNERSHIP = "Partnership"
    CONSULTING = "Consulting"
    LICENSE = "License"
    FRANCHISE = "Franchise"
    DISTRIBUTION = "Distribution"
    MAINTENANCE = "Maintenance"
    INSURANCE = "Insurance"
    LOAN = "Loan"
    LEASE = "Lease"
    SUBSCRIPTION = "Subscription"
    SUPPORT = "Support"
    OTHER = "Other"

    @property
    def color(self) -> str:
        return _TYPE_COLORS.get(self, _NEUTRAL)

    @classmethod
    def parse(cls, label: str) -> "ContractType":
        """Unknown labels map to OTHER."""
        try:
            return cls(label)
        except ValueError:
            return cls.OTHER


_TYPE_COLORS = {
    ContractType.EMPLOYMENT: "#007AFF",    # blue
    ContractType.RENTAL: "#AF52DE",        # purple
    ContractType.SERVICE: "#FF9500",       # orange
    ContractType.PURCHASE: "#34C759",      # green
    ContractType.PARTNERSHIP: "#FF2D55",   # pink
}

# Choices offered by the contract form
FORM_TYPES: tuple[ContractType, ...] = (
    ContractType.EMPLOYMENT,
    ContractType.RENTAL,
    ContractType.SERVICE,
    ContractType.PURCHASE,
    ContractType.PARTNERSHIP,
    ContractType.OTHER,
)

# Vocabulary of the sample generator (everything except OTHER)
SAMPLE_TYPES: tuple[ContractType, ...] = tuple(t for t in ContractType if t is not ContractType.OTHER)
