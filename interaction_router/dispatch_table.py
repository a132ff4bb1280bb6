"""Generic routing-key to async-handler registry."""
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, List, TypeVar, Union

from .errors import DuplicateKeyError, RegistryFrozenError

T = TypeVar('T')

Handler = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class Found(Generic[T]):
    """Successful lookup (holds the handler) or invocation (holds its result)."""
    value: T


@dataclass(frozen=True)
class NotFound:
    """No handler is registered for `key`."""
    key: str


LookupResult = Union[Found[Handler], NotFound]


class DispatchTable:
    """Maps a routing key to exactly one async handler.

    Keys are registered once during setup. After `freeze()` the table is
    read-only and further registration raises RegistryFrozenError.
    """

    def __init__(self, scope: str = 'global'):
        self.scope = scope
        self._handlers: Dict[str, Handler] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def check_available(self, key: str) -> None:
        """Raise if `key` cannot be registered in this table."""
        if not isinstance(key, str) or not key:
            raise ValueError("routing key must be a non-empty string")
        if self._frozen:
            raise RegistryFrozenError(key)
        if key in self._handlers:
            raise DuplicateKeyError(key, self.scope)

    def register(self, key: str, handler: Handler) -> None:
        self.check_available(key)
        self._handlers[key] = handler

    def lookup(self, key: str) -> LookupResult:
        handler = self._handlers.get(key)
        if handler is None:
            return NotFound(key)
        return Found(handler)

    async def invoke(self, key: str, ctx: Any, interaction: dict, *args) -> Union[Found[Any], NotFound]:
        """Run the handler for `key`; a miss invokes nothing and returns NotFound."""
        result = self.lookup(key)
        if isinstance(result, NotFound):
            return result
        return Found(await result.value(ctx, interaction, *args))

    def keys(self) -> List[str]:
        return list(self._handlers)

    def __contains__(self, key: object) -> bool:
        return key in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
