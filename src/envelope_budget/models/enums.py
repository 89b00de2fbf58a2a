"""Enumerations shared by models, schemas and services."""
import enum


class IntervalType(str, enum.Enum):
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class AmountType(str, enum.Enum):
    """How an envelope's allocation is computed."""

    FIXED = "FIXED"
    PERCENTAGE_CURRENT = "PERCENTAGE_CURRENT"
    PERCENTAGE_PREVIOUS = "PERCENTAGE_PREVIOUS"


class RefreshType(str, enum.Enum):
    """What happens to unspent balance at the end of an interval."""

    REFRESH = "REFRESH"
    ROLLOVER = "ROLLOVER"


class TransactionType(str, enum.Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class CategorizationSource(str, enum.Enum):
    AUTO = "AUTO"
    MANUAL = "MANUAL"
