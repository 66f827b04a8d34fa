"""
Wallet Store - one fee wallet per token symbol, kept as JSON on local disk.

Layout: <home>/wallets/<SYMBOL>.json, mode 0600. A wallet file is written
exactly once and never rewritten; address is stored, not re-derived.
"""
import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from eth_account import Account
from web3 import Web3

from cryke.errors import ConfigFault, StorageFault

logger = logging.getLogger(__name__)

WALLET_NOTE = "KEEP THIS FILE SAFE! This private key controls your token's fee wallet."


@dataclass
class WalletRecord:
    symbol: str
    address: str
    private_key: str
    created_at: str
    path: Path

    def to_json(self) -> dict:
        return {
            "symbol": self.symbol,
            "address": self.address,
            "privateKeySecret": self.private_key,
            "createdAt": self.created_at,
            "note": WALLET_NOTE,
        }


@dataclass
class ResolvedWallet:
    record: WalletRecord
    created: bool

    @property
    def address(self) -> str:
        return self.record.address

    @property
    def path(self) -> Path:
        return self.record.path


def normalize_symbol(symbol: str) -> str:
    symbol = (symbol or "").strip().upper()
    if not symbol:
        raise ConfigFault("Token symbol is required")
    if "/" in symbol or "\\" in symbol or symbol.startswith("."):
        raise ConfigFault(f"Invalid token symbol: {symbol!r}")
    return symbol


class WalletStore:
    """Persists and looks up per-symbol fee wallets."""

    def __init__(self, wallets_dir: Path):
        self.wallets_dir = Path(wallets_dir)

    def path_for(self, symbol: str) -> Path:
        return self.wallets_dir / f"{normalize_symbol(symbol)}.json"

    def load(self, symbol: str) -> Optional[WalletRecord]:
        """Return the stored wallet for `symbol`, or None if there is no
        usable file. A file that parses badly is moved aside, never
        overwritten; a file that cannot be read at all is a StorageFault."""
        path = self.path_for(symbol)
        if not path.exists():
            return None

        try:
            with open(path) as f:
                raw = f.read()
        except OSError as e:
            raise StorageFault(f"Cannot read wallet file {path}: {e}") from e

        try:
            data = json.loads(raw)
            address = data["address"]
            private_key = data.get("privateKeySecret") or data["privateKey"]
            if not isinstance(address, str) or not Web3.is_address(address):
                raise ValueError(f"invalid address {address!r}")
            if not isinstance(private_key, str) or not private_key.strip():
                raise ValueError("missing private key")
            return WalletRecord(
                symbol=data.get("symbol") or normalize_symbol(symbol),
                address=address,
                private_key=private_key,
                created_at=data.get("createdAt", ""),
                path=path,
            )
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            self._quarantine(path, e)
            return None

    def resolve_or_create(self, symbol: str) -> ResolvedWallet:
        symbol = normalize_symbol(symbol)
        existing = self.load(symbol)
        if existing:
            logger.info(f"Found existing wallet for {symbol}: {existing.address}")
            return ResolvedWallet(existing, created=False)
        return ResolvedWallet(self._create(symbol), created=True)

    def _create(self, symbol: str) -> WalletRecord:
        account = Account.create()
        path = self.path_for(symbol)
        record = WalletRecord(
            symbol=symbol,
            address=account.address,
            private_key="0x" + bytes(account.key).hex(),
            created_at=datetime.now(timezone.utc).isoformat(),
            path=path,
        )

        try:
            self.wallets_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageFault(f"Cannot create wallet directory {self.wallets_dir}: {e}") from e

        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        except FileExistsError:
            raced = self.load(symbol)
            if raced:
                return raced
            raise StorageFault(f"Wallet file {path} appeared while creating it and is unreadable")
        except OSError as e:
            raise StorageFault(f"Cannot create wallet file {path}: {e}") from e

        try:
            with os.fdopen(fd, "w") as f:
                json.dump(record.to_json(), f, indent=2)
            os.chmod(path, 0o600)
        except OSError as e:
            raise StorageFault(f"Cannot write wallet file {path}: {e}") from e

        logger.info(f"Created wallet for {symbol}: {record.address} ({path})")
        return record

    def _quarantine(self, path: Path, error: Exception):
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        backup = path.with_name(f"{path.name}.corrupt-{stamp}")
        logger.warning(f"Wallet file {path} is unparseable ({error}); moving it to {backup}")
        try:
            os.replace(path, backup)
        except OSError as e:
            raise StorageFault(f"Wallet file {path} is unparseable and could not be moved aside: {e}") from e
