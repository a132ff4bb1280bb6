"""Routes decoded Discord interactions to registered handlers."""
from typing import Dict, Generic, List, Optional, Tuple, TypeVar, Union

from .command_registry import CommandRegistry
from .constants import InteractionType
from .dispatch_table import DispatchTable, Handler, NotFound
from .observability import get_logger, traced_function
from .response_utils import pong_response

logger = get_logger('interaction-router')

Context = TypeVar('Context')

DEFAULT_ID_SEPARATOR = '_'


class InteractionRouter(Generic[Context]):
    """A router for Discord webhook interactions.

    `ctx` is handed to every handler; put API clients, tokens and the
    ExecutionContext for background work there.

    Handler signatures:
        commands:     async (ctx, interaction) -> response dict
        autocomplete: async (ctx, interaction) -> response dict
        components:   async (ctx, interaction, remainder) -> None
        modal submit: async (ctx, interaction, remainder) -> None

    All registration happens before the first call to `handle()`, which
    freezes the tables.
    """

    def __init__(self, ctx: Context, separator: str = DEFAULT_ID_SEPARATOR):
        if not separator:
            raise ValueError("separator must be a non-empty string")
        self.ctx = ctx
        self.separator = separator
        self.commands = CommandRegistry()
        self.components = DispatchTable('components')
        self.completions = DispatchTable('autocomplete')
        self.modal_submissions = DispatchTable('modal submit')

    def register_command(self, handler: Handler, command: dict, guilds: Optional[List[str]] = None) -> None:
        """Register an application command.

        There is no separate routing key: the descriptor's `name` is used, so
        the name registered with Discord and the one routed on always agree.
        `/help` is reserved for the generated help message.

        Raises DuplicateKeyError on a duplicate registration.
        """
        self.commands.register(handler, command, guilds)

    def register_component(self, action: str, handler: Handler) -> None:
        self.components.register(action, handler)

    def register_autocomplete(self, key: str, handler: Handler) -> None:
        self.completions.register(key, handler)

    def register_modal_submit(self, key: str, handler: Handler) -> None:
        self.modal_submissions.register(key, handler)

    def extract_id_identifier(self, custom_id: str) -> Tuple[str, str]:
        """Split a component or modal custom ID into (routing key, remainder).

        Discord only gives a single custom ID to identify the source of a
        component or modal interaction. Prefixing IDs with a common key keeps
        routing simple: `calendar_month:january_user:0123456` routes to
        `calendar` and the handler receives `month:january_user:0123456`.

        Override in a subclass for a different scheme.
        """
        key, _, remainder = custom_id.partition(self.separator)
        return key, remainder

    def get_global_commands(self) -> List[dict]:
        return self.commands.list_global()

    def get_commands_for_guild(self, guild_id: str) -> List[dict]:
        return self.commands.list_for_guild(guild_id)

    def get_all_guild_commands(self) -> Dict[str, List[dict]]:
        """Guild-specific commands of every guild, without global ones."""
        return self.commands.list_all_guilds()

    @property
    def frozen(self) -> bool:
        return self.commands.frozen

    def freeze(self) -> None:
        """End the registration phase."""
        self.commands.freeze()
        self.components.freeze()
        self.completions.freeze()
        self.modal_submissions.freeze()

    @traced_function("interaction_router_handle")
    async def handle(self, interaction: dict) -> Union[dict, None, NotFound]:
        """Handle a verified, JSON-decoded interaction.

        Returns:
            The response payload for pings, commands and autocomplete; None
            for components and modal submits; NotFound when nothing is
            registered for the interaction.
        """
        if not self.frozen:
            self.freeze()

        interaction_type = interaction.get('type')
        data = interaction.get('data') or {}

        if interaction_type == InteractionType.PING:
            return pong_response()

        if interaction_type == InteractionType.APPLICATION_COMMAND:
            name = data.get('name')
            if not name:
                return self._missing('application command', None)
            result = await self.commands.invoke(name, self.ctx, interaction)
            if isinstance(result, NotFound):
                return self._missing('application command', name)
            return result.value

        if interaction_type == InteractionType.MESSAGE_COMPONENT:
            return await self._handle_custom_id(self.components, 'component', data, interaction)

        if interaction_type == InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE:
            name = data.get('name')
            if not name:
                return self._missing('autocomplete', None)
            result = await self.completions.invoke(name, self.ctx, interaction)
            if isinstance(result, NotFound):
                return self._missing('autocomplete', name)
            return result.value

        if interaction_type == InteractionType.MODAL_SUBMIT:
            return await self._handle_custom_id(self.modal_submissions, 'modal submit', data, interaction)

        return self._missing('interaction type', str(interaction_type))

    async def _handle_custom_id(self, table: DispatchTable, kind: str, data: dict, interaction: dict):
        custom_id = data.get('custom_id')
        if not custom_id:
            return self._missing(kind, None)

        key, remainder = self.extract_id_identifier(custom_id)
        result = await table.invoke(key, self.ctx, interaction, remainder)
        if isinstance(result, NotFound):
            return self._missing(kind, key)
        return None

    @staticmethod
    def _missing(kind: str, key: Optional[str]) -> NotFound:
        logger.warning("No handler registered", kind=kind, key=key)
        return NotFound(key or '')
