"""
handlers/message_handler.py
----------------------------
Interprets raw protocol messages and dispatches them to the services.

Except for "BYE", every message gets exactly one response. Nothing raised
while parsing, decoding or dispatching ever leaves `handle_message`.
"""

import logging
from typing import Callable, Optional

from db.connection import ConnectionProvider
from models.query import ConsultQuery, DeleteQuery, NewCustomerQuery, Query, WithdrawalQuery
from models.response import (
    INVALID_PREFIX,
    UNKNOWN_FORMAT_ERROR,
    UNKNOWN_PREFIX,
    ErrorResponse,
    ServerResponse,
)
from services.account_service import AccountService
from services.customer_service import CustomerService
from utils.codec import decode_query
from utils.logger import get_logger

BYE = "BYE"
SEPARATOR = " "


class MessageHandler:
    """
    Dispatcher from request lines to service calls.

    Args:
        provider: Connection provider shared by the services.
        decode: Codec turning a payload into a query of the given class.
        logger: Logger passed down to the services.
    """

    def __init__(
        self,
        provider: ConnectionProvider,
        decode: Callable[[str, type], Query] = decode_query,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._decode = decode
        self._logger = logger or get_logger(__name__)
        accounts = AccountService(provider, self._logger)
        customers = CustomerService(provider, self._logger)
        self._routes: dict[str, tuple[type, Callable[[Query], ServerResponse]]] = {
            "CONSULT": (ConsultQuery, accounts.consult),
            "NEWCUSTOMER": (NewCustomerQuery, customers.new_customer),
            "WITHDRAWAL": (WithdrawalQuery, accounts.withdraw),
            "DELETE": (DeleteQuery, accounts.delete),
        }

    def handle_message(self, message: str) -> Optional[ServerResponse]:
        """
        Analyse a message and dispatch it to the matching service.

        Args:
            message: The line received from the client, without its terminator.

        Returns:
            None if the client said "BYE" and the session must end,
            otherwise the response to send back.
        """
        if message == BYE:
            self._logger.debug("Client said BYE")
            return None

        try:
            prefix_end = message.find(SEPARATOR)
            if prefix_end == -1:
                self._logger.debug(f"Invalid prefix. Message was: {message!r}")
                return ErrorResponse(INVALID_PREFIX)

            prefix = message[:prefix_end]
            payload = message[prefix_end + 1:]

            route = self._routes.get(prefix)
            if route is None:
                self._logger.debug(f"Unknown prefix {prefix!r}")
                return ErrorResponse(UNKNOWN_PREFIX)

            query_cls, handle = route
            return handle(self._decode(payload, query_cls))
        except Exception as e:
            self._logger.debug(f"Unknown format error ({e}). Message was: {message!r}")
            return ErrorResponse(UNKNOWN_FORMAT_ERROR)
