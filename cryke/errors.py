"""
Cryke faults. Every error the CLIs know how to report derives from CrykeError.
"""
from typing import Optional


class CrykeError(Exception):
    """Base class for all cryke faults."""


class ConfigFault(CrykeError):
    """A required secret, argument or setting is missing or malformed."""


class StorageFault(CrykeError):
    """The wallet directory or a wallet file could not be read or written."""


class RpcFault(CrykeError):
    """A contract read or node round-trip failed."""


class TransactionFault(CrykeError):
    """A submitted transaction reverted, timed out or never reached the node."""

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        super().__init__(message)
        self.tx_hash = tx_hash


class DeploymentFault(CrykeError):
    """The launch API reported a failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AnnouncementFault(CrykeError):
    """A social post failed. Always absorbed by the fan-out."""
