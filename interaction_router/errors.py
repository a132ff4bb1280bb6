"""Setup-time errors raised while populating dispatch tables."""


class RegistrationError(Exception):
    """Base class for misconfiguration detected during registration."""


class DuplicateKeyError(RegistrationError):
    """A routing key was registered twice in the same scope."""

    def __init__(self, key: str, scope: str = 'global'):
        self.key = key
        self.scope = scope
        super().__init__(f"'{key}' is already registered ({scope})")


class RegistryFrozenError(RegistrationError):
    """Registration attempted after the table started serving requests."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"cannot register '{key}': registration phase is over")
