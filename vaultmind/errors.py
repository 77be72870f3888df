class VaultMindError(Exception):
    """Base class for errors raised at the vault boundary."""


class VaultNotFoundError(VaultMindError):
    """The vault directory does not exist or is not a directory."""


class OutsideVaultError(VaultMindError):
    """A fix would write to a path outside the vault directory."""
