"""Discord interaction webhook verification and routing."""
from .background import ExecutionContext, TaskHandle
from .command_registry import CommandRegistry
from .dispatch_table import DispatchTable, Found, NotFound
from .errors import DuplicateKeyError, RegistrationError, RegistryFrozenError
from .interaction_handler import InteractionRouter
from .verifier import verify, verify_headers

__all__ = [
    'CommandRegistry',
    'DispatchTable',
    'DuplicateKeyError',
    'ExecutionContext',
    'Found',
    'InteractionRouter',
    'NotFound',
    'RegistrationError',
    'RegistryFrozenError',
    'TaskHandle',
    'verify',
    'verify_headers',
]
