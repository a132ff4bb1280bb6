"""Registry for application command handlers with guild-scoped overrides."""
from typing import Any, Dict, Iterable, List, Optional, Union

from .constants import HELP_COMMAND
from .dispatch_table import DispatchTable, Found, Handler, LookupResult, NotFound
from .errors import DuplicateKeyError, RegistryFrozenError
from .help import format_command_set
from .observability import get_logger
from .response_utils import message_response

logger = get_logger('interaction-router-registry')

HELP_KEY = HELP_COMMAND['name']


def get_guild_id(interaction: dict) -> Optional[str]:
    """Guild the interaction originated from, None for DMs."""
    guild_id = interaction.get('guild_id')
    if guild_id:
        return str(guild_id)
    guild = interaction.get('guild') or {}
    if guild.get('id'):
        return str(guild['id'])
    return None


class CommandRegistry:
    """Application command handlers, global and per guild.

    The descriptor `name` is the routing key, so the name registered with
    Discord and the name routed on cannot drift apart. Guild tables are
    consulted before the global table. The reserved `help` command is
    registered at construction and renders every command visible in the
    calling guild.
    """

    def __init__(self):
        self.global_table = DispatchTable('global')
        self.guild_tables: Dict[str, DispatchTable] = {}
        self.global_commands: List[dict] = [dict(HELP_COMMAND)]
        self.guild_commands: Dict[str, List[dict]] = {}
        self._frozen = False

        self.global_table.register(HELP_KEY, self._handle_help)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True
        self.global_table.freeze()
        for table in self.guild_tables.values():
            table.freeze()

    def register(self, handler: Handler, command: dict, guilds: Optional[Iterable[str]] = None) -> None:
        """Register a command handler.

        Args:
            handler: Async callable taking (ctx, interaction)
            command: Descriptor as sent to the Discord registration API
            guilds: Guild IDs to register into instead of the global table

        Raises:
            DuplicateKeyError: The name is reserved or already taken in scope
            RegistryFrozenError: Called after the registry was frozen
        """
        key = command.get('name')
        if self._frozen:
            raise RegistryFrozenError(key)
        if key == HELP_KEY:
            raise DuplicateKeyError(key, 'reserved')

        if guilds is None:
            self._register_global(handler, command, key)
        else:
            self._register_guilds(handler, command, key, [str(guild) for guild in guilds])

    def _register_global(self, handler: Handler, command: dict, key: str) -> None:
        self.global_table.check_available(key)
        # Only guilds known at this point are checked
        for guild_id, table in self.guild_tables.items():
            if key in table:
                raise DuplicateKeyError(key, f'guild {guild_id}')

        self.global_table.register(key, handler)
        self.global_commands.append(command)
        logger.debug("Registered global command", command=key)

    def _register_guilds(self, handler: Handler, command: dict, key: str, guilds: List[str]) -> None:
        if not guilds:
            raise ValueError("guilds must name at least one guild")

        # Validate every target before touching any table
        seen = set()
        for guild_id in guilds:
            if guild_id in seen:
                raise DuplicateKeyError(key, f'guild {guild_id}')
            seen.add(guild_id)
            table = self.guild_tables.get(guild_id)
            if table is not None:
                table.check_available(key)
            elif not isinstance(key, str) or not key:
                raise ValueError("routing key must be a non-empty string")

        for guild_id in guilds:
            table = self.guild_tables.setdefault(guild_id, DispatchTable(f'guild {guild_id}'))
            table.register(key, handler)
            self.guild_commands.setdefault(guild_id, []).append(command)

        logger.debug("Registered guild command", command=key, guilds=guilds)

    def resolve(self, key: str, guild_id: Optional[str] = None) -> LookupResult:
        """Guild override if there is one, else the global handler."""
        if guild_id is not None:
            table = self.guild_tables.get(str(guild_id))
            if table is not None:
                result = table.lookup(key)
                if isinstance(result, Found):
                    return result
        return self.global_table.lookup(key)

    async def invoke(self, key: str, ctx: Any, interaction: dict) -> Union[Found[Any], NotFound]:
        result = self.resolve(key, get_guild_id(interaction))
        if isinstance(result, NotFound):
            return result
        return Found(await result.value(ctx, interaction))

    def list_global(self) -> List[dict]:
        return list(self.global_commands)

    def list_for_guild(self, guild_id: str) -> List[dict]:
        return list(self.guild_commands.get(str(guild_id), []))

    def list_all_guilds(self) -> Dict[str, List[dict]]:
        return {guild_id: list(commands) for guild_id, commands in self.guild_commands.items()}

    async def _handle_help(self, ctx: Any, interaction: dict) -> dict:
        commands = self.list_global()
        guild_id = get_guild_id(interaction)
        if guild_id:
            commands.extend(self.list_for_guild(guild_id))
        return message_response(content=format_command_set(commands), ephemeral=True)
