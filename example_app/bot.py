"""Application context and router assembly."""
from dataclasses import dataclass, field

from interaction_router import ExecutionContext, InteractionRouter

from .command_handlers import HELLO_COMMAND, THINK_COMMAND, handle_hello, handle_think
from .config import Config


@dataclass
class AppContext:
    """Shared state passed to every handler."""
    app_name: str
    application_id: str
    discord_token: str
    think_delay: float = 5
    execution: ExecutionContext = field(default_factory=ExecutionContext)

    @classmethod
    def from_config(cls) -> "AppContext":
        return cls(
            app_name=Config.APP_NAME,
            application_id=Config.DISCORD_APPLICATION_ID,
            discord_token=Config.DISCORD_BOT_TOKEN,
            think_delay=Config.THINK_DELAY_SECONDS
        )


def build_router(ctx: AppContext) -> InteractionRouter[AppContext]:
    router = InteractionRouter(ctx)

    router.register_command(handle_hello, HELLO_COMMAND)
    router.register_command(handle_think, THINK_COMMAND)

    router.freeze()
    return router
