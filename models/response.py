"""
models/response.py
------------------
Server responses, the inner half of the two-tier protocol.

The transport wraps an ErrorResponse in an "ERR" envelope and every
other variant in an "OK" envelope. A KO status inside an OK envelope
means the request ran but did not apply.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class Status(str, Enum):
    OK = "OK"
    KO = "KO"


class InsertFailure(str, Enum):
    """Why a NewCustomer request came back KO."""
    NOT_INSERTED = "not_inserted"  # statement ran, affected-count != 1
    FAILED = "failed"              # statement raised


@dataclass(frozen=True)
class ErrorResponse:
    message: str

    def is_error(self) -> bool:
        return True


@dataclass(frozen=True)
class ConsultResponse:
    balance: Decimal

    def is_error(self) -> bool:
        return False


@dataclass(frozen=True)
class NewCustomerResponse:
    """
    Outcome of a NewCustomer request.

    Attributes:
        status: OK if exactly one row was inserted.
        failure: Set only when status is KO. Kept out of the wire format,
            which only carries the status.
    """
    status: Status
    failure: Optional[InsertFailure] = None

    def is_error(self) -> bool:
        return False


@dataclass(frozen=True)
class WithdrawalResponse:
    balance: Decimal

    def is_error(self) -> bool:
        return False


@dataclass(frozen=True)
class DeleteResponse:
    status: Status

    def is_error(self) -> bool:
        return False


ServerResponse = (
    ErrorResponse
    | ConsultResponse
    | NewCustomerResponse
    | WithdrawalResponse
    | DeleteResponse
)


# ── Error messages ────────────────────────────────────────
INVALID_PREFIX = "Invalid prefix"
UNKNOWN_PREFIX = "Unknown prefix"
UNKNOWN_FORMAT_ERROR = "Unknown format error"
SERVER_SIDE_ERROR = "Server-side error. Please retry later."
DATABASE_ERROR = "Database error"
ACCOUNT_NOT_FOUND = "Account not found"
