"""
services/customer_service.py
-----------------------------
Business logic for customer registration.
"""

import logging
from typing import Optional

from db.connection import ConnectionProvider
from models.query import NewCustomerQuery
from models.response import (
    SERVER_SIDE_ERROR,
    ErrorResponse,
    InsertFailure,
    NewCustomerResponse,
    ServerResponse,
    Status,
)
from models.result import Outcome
from repositories.customer_repo import CustomerRepository
from utils.logger import get_logger


class CustomerService:
    """Orchestrates customer creation."""

    def __init__(self, provider: ConnectionProvider, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or get_logger(__name__)
        self.repo = CustomerRepository(provider, self._logger)

    def new_customer(self, query: NewCustomerQuery) -> ServerResponse:
        """
        Register a customer.

        Both an insert that affected no row and an insert that raised come
        back as KO; `failure` tells them apart.
        """
        result = self.repo.add(query)

        if result.outcome is Outcome.SUCCESS:
            return NewCustomerResponse(Status.OK)
        if result.outcome is Outcome.UNAVAILABLE:
            return ErrorResponse(SERVER_SIDE_ERROR)
        if result.outcome is Outcome.NO_MATCH:
            return NewCustomerResponse(Status.KO, InsertFailure.NOT_INSERTED)
        return NewCustomerResponse(Status.KO, InsertFailure.FAILED)
