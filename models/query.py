"""
models/query.py
---------------
Client queries, one dataclass per protocol prefix.
A query is built once per request from the decoded payload and never mutated.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ConsultQuery:
    """Read the balance of an account."""
    account_id: int


@dataclass(frozen=True)
class NewCustomerQuery:
    """
    Register a new customer.

    Attributes:
        first_name: Given name.
        last_name: Family name.
        age: Age in years.
        sex: Free-form sex/gender marker (e.g. 'M', 'F').
        activity: Profession or activity.
        address: Postal address.
    """
    first_name: str
    last_name: str
    age: int
    sex: str
    activity: str
    address: str


@dataclass(frozen=True)
class WithdrawalQuery:
    """
    Apply a signed delta to an account balance.

    A negative value withdraws money, a positive one deposits it.
    """
    account_id: int
    value: Decimal


@dataclass(frozen=True)
class DeleteQuery:
    """Delete an account."""
    account_id: int


Query = ConsultQuery | NewCustomerQuery | WithdrawalQuery | DeleteQuery
