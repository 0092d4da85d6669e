"""
services/account_service.py
----------------------------
Business logic for account operations: Consult, Withdrawal and Delete.

Each method maps a repository result onto exactly one ServerResponse
and never raises.
"""

import logging
from typing import Optional

from db.connection import ConnectionProvider
from models.query import ConsultQuery, DeleteQuery, WithdrawalQuery
from models.response import (
    ACCOUNT_NOT_FOUND,
    DATABASE_ERROR,
    SERVER_SIDE_ERROR,
    ConsultResponse,
    DeleteResponse,
    ErrorResponse,
    ServerResponse,
    Status,
    WithdrawalResponse,
)
from models.result import Outcome
from repositories.account_repo import AccountRepository
from utils.logger import get_logger


class AccountService:
    """Orchestrates account reads and mutations."""

    def __init__(self, provider: ConnectionProvider, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or get_logger(__name__)
        self.repo = AccountRepository(provider, self._logger)

    def consult(self, query: ConsultQuery) -> ServerResponse:
        """Return the balance of an account, or why it could not be read."""
        result = self.repo.get_balance(query.account_id)

        if result.outcome is Outcome.SUCCESS:
            return ConsultResponse(result.balance)
        if result.outcome is Outcome.NO_MATCH:
            self._logger.debug(f"Consult: account {query.account_id} not found")
            return ErrorResponse(ACCOUNT_NOT_FOUND)
        if result.outcome is Outcome.UNAVAILABLE:
            return ErrorResponse(SERVER_SIDE_ERROR)
        return ErrorResponse(DATABASE_ERROR)

    def withdraw(self, query: WithdrawalQuery) -> ServerResponse:
        """
        Apply the signed value to the balance and return the persisted balance.

        The balance in the response is always the one read back from the
        database after the update, never a locally computed one.
        """
        result = self.repo.add_to_balance(query.account_id, query.value)

        if result.outcome is Outcome.SUCCESS:
            return WithdrawalResponse(result.balance)
        if result.outcome is Outcome.UNAVAILABLE:
            return ErrorResponse(SERVER_SIDE_ERROR)
        if result.outcome is Outcome.NO_MATCH:
            self._logger.warning(f"Withdrawal: no balance to read back for account {query.account_id}")
        return ErrorResponse(DATABASE_ERROR)

    def delete(self, query: DeleteQuery) -> ServerResponse:
        """
        Delete an account.

        KO means the statement ran but matched nothing; an ErrorResponse
        means it could not run at all.
        """
        result = self.repo.delete(query.account_id)

        if result.outcome is Outcome.SUCCESS:
            return DeleteResponse(Status.OK)
        if result.outcome is Outcome.NO_MATCH:
            return DeleteResponse(Status.KO)
        if result.outcome is Outcome.UNAVAILABLE:
            return ErrorResponse(SERVER_SIDE_ERROR)
        return ErrorResponse(DATABASE_ERROR)
