"""Transaction manager interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    """Atomic unit of work over the backing store.

    Every write made inside `atomic()` is applied together or not at all.
    Blocks nest: an inner block that fails is undone without touching the
    outer one, and the outermost block makes the work durable on exit.
    """

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic block.

        Usage:
            async with transaction_manager.atomic():
                ...

        Raises:
            ConflictError: If a concurrent transaction prevented the commit
            StoreUnavailableError: If the store could not be reached
        """
        pass
