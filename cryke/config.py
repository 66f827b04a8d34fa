"""
Cryke configuration - one Config built from the environment (and .env),
passed explicitly into every flow.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from cryke.errors import ConfigFault

# ==================== CHAIN (Base mainnet) ====================

WETH_ADDRESS = "0x4200000000000000000000000000000000000006"
FEE_LOCKER_ADDRESS = "0xF3622742b1E446D92e45E22923Ef11C2fcD55D68"
EXPLORER_URL = "https://basescan.org"

FEE_LOCKER_ABI = [
    {
        "inputs": [
            {"name": "feeOwner", "type": "address"},
            {"name": "token", "type": "address"},
        ],
        "name": "feesToClaim",
        "outputs": [{"name": "balance", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "feeOwner", "type": "address"},
            {"name": "token", "type": "address"},
        ],
        "name": "claim",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

# ==================== DEFAULTS ====================

DEFAULT_RPC_URL = "https://mainnet.base.org"
DEFAULT_LAUNCH_API_URL = "https://cryke.com/api/launch"
DEFAULT_HOME = Path.home() / ".cryke"
DEFAULT_HTTP_TIMEOUT = 30

PUBLISHER_ENV_VARS = ("MOLTX_API_KEY", "MOLTBOOK_API_KEY", "FOURCLAW_API_KEY")


def tx_url(tx_hash: str) -> str:
    return f"{EXPLORER_URL}/tx/{tx_hash}"


def _float_or_none(name: str, raw: Optional[str]) -> Optional[float]:
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigFault(f"{name} must be a number of seconds, got {raw!r}")


@dataclass
class Config:
    private_key: Optional[str] = None
    rpc_url: str = DEFAULT_RPC_URL
    launch_api_url: str = DEFAULT_LAUNCH_API_URL
    home_dir: Path = DEFAULT_HOME
    moltx_api_key: Optional[str] = None
    moltbook_api_key: Optional[str] = None
    fourclaw_api_key: Optional[str] = None
    request_timeout: float = DEFAULT_HTTP_TIMEOUT
    receipt_timeout: Optional[float] = None

    @property
    def wallets_dir(self) -> Path:
        return Path(self.home_dir) / "wallets"

    @property
    def logs_dir(self) -> Path:
        return Path(self.home_dir) / "logs"

    def require_private_key(self, purpose: str = "claim fees") -> str:
        if not self.private_key:
            raise ConfigFault(f"BASE_PRIVATE_KEY environment variable required to {purpose}")
        return self.private_key

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a Config from the process environment.

        A .env file in the working directory is loaded first, without
        overriding anything already exported. Passing `env` skips both and
        reads only from that mapping.
        """
        if env is None:
            load_dotenv()
            env = os.environ

        timeout = _float_or_none("CRYKE_HTTP_TIMEOUT", env.get("CRYKE_HTTP_TIMEOUT"))
        home = env.get("CRYKE_HOME")

        return cls(
            private_key=env.get("BASE_PRIVATE_KEY") or None,
            rpc_url=env.get("BASE_RPC_URL") or DEFAULT_RPC_URL,
            launch_api_url=env.get("CRYKE_API_URL") or DEFAULT_LAUNCH_API_URL,
            home_dir=Path(home).expanduser() if home else DEFAULT_HOME,
            moltx_api_key=env.get("MOLTX_API_KEY") or None,
            moltbook_api_key=env.get("MOLTBOOK_API_KEY") or None,
            fourclaw_api_key=env.get("FOURCLAW_API_KEY") or None,
            request_timeout=timeout if timeout is not None else DEFAULT_HTTP_TIMEOUT,
            receipt_timeout=_float_or_none("CRYKE_RECEIPT_TIMEOUT", env.get("CRYKE_RECEIPT_TIMEOUT")),
        )
