from enum import Enum

class TransactionType(Enum):
    """Represents whether money is coming in or out"""
    INCOME = "income" # in
    EXPENSE = "expense" # out

class TimeWindow(Enum):
    """Time range a summary is filtered to"""
    ALL = "all"
    DAILY = "daily"
    WEEKLY = "weekly" # rolling 7 days, not calendar aligned
    MONTHLY = "monthly"
    YEARLY = "yearly"
