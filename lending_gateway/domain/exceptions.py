"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidCommissionTransitionError(DomainException):
    """Commission status change is not allowed from the current status"""

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot move commission from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested


class PlanNotFoundError(DomainException):
    """Subscription plan name is not in the catalog"""

    pass
