"""
models/result.py
----------------
Explicit result type returned by every repository method.

Repositories never use exceptions to report expected database outcomes;
services branch on `outcome` instead.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class Outcome(Enum):
    SUCCESS = "success"          # statement ran and matched
    NO_MATCH = "no_match"        # statement ran, nothing matched
    FAILED = "failed"            # statement raised
    UNAVAILABLE = "unavailable"  # no connection could be acquired


@dataclass(frozen=True)
class RepositoryResult:
    """
    Attributes:
        outcome: What happened.
        balance: Balance read back, for reads that matched.
        error: The exception behind FAILED or UNAVAILABLE.
    """
    outcome: Outcome
    balance: Optional[Decimal] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, balance: Optional[Decimal] = None) -> "RepositoryResult":
        return cls(Outcome.SUCCESS, balance=balance)

    @classmethod
    def no_match(cls) -> "RepositoryResult":
        return cls(Outcome.NO_MATCH)

    @classmethod
    def failed(cls, error: Exception) -> "RepositoryResult":
        return cls(Outcome.FAILED, error=error)

    @classmethod
    def unavailable(cls, error: Exception) -> "RepositoryResult":
        return cls(Outcome.UNAVAILABLE, error=error)
