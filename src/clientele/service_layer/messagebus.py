"""Message bus implementation for handling commands."""

import logging
from collections.abc import Callable
from typing import Any

from clientele.domain.errors import CustomerError
from clientele.interfaces.unit_of_work import AbstractUnitOfWork

from .commands import Command

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


class NoHandlerForCommand(LookupError):
    """Exception raised when no handler is found for a command."""

    def __init__(self, cmd: Command) -> None:
        super().__init__(f"No handler found for command {type(cmd).__name__}")


class MessageBus:
    """Routes commands to their handlers.

    Args:
        uow: The unit of work injected into the handlers, also exposed here for
            convenience (e.g. to run queries against the same store).
        command_handlers: A mapping of command types to handlers. Handlers take
            the command as their only argument; other dependencies are bound
            beforehand (see `clientele.bootstrap.inject_dependencies`).

    Note:
        Dispatch is synchronous. The handler's return value (the persisted
        customer, or ``None`` for deletes) is handed back to the caller.
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        command_handlers: dict[type[Command], Callable[..., Any]],
    ) -> None:
        self.uow = uow
        self._command_handlers = command_handlers

    def handle(self, cmd: Command) -> Any:
        """Dispatch `cmd` to its handler and return the handler's result.

        Raises:
            NoHandlerForCommand: If no handler is registered for the command type.
            CustomerError: The domain outcome of a failed command.
        """

        if handler := self._command_handlers.get(type(cmd)):
            handler_name = self._get_handler_name(handler)
            logger.debug("Handling command %s with handler %s", type(cmd).__name__, handler_name)
            try:
                return handler(cmd)
            except CustomerError as e:
                logger.debug(
                    "Command %s ended with %s", type(cmd).__name__, type(e).__name__
                )
                raise
            except Exception:  # pylint: disable=broad-except
                logger.exception(
                    "Exception handling command %s with handler %s",
                    type(cmd).__name__,
                    handler_name,
                )
                raise
        logger.error("No handler found for command %s", type(cmd).__name__)
        raise NoHandlerForCommand(cmd)

    @staticmethod
    def _get_handler_name(fn: Callable[..., Any]) -> str:
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)
