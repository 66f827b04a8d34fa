"""
Cryke flows.

launch:      resolve wallet -> validate -> deploy -> announce -> summarize
check_fees:  read WETH and token fees for an owner
claim_fees:  check_fees, then claim + confirm each asset with a positive balance
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from eth_account import Account
from web3 import Web3

from cryke.announce import AnnouncementFanout, LaunchEvent, Publisher, publishers_from_config
from cryke.colors import C, banner, info, step, success, warn
from cryke.config import PUBLISHER_ENV_VARS, WETH_ADDRESS, Config, tx_url
from cryke.errors import ConfigFault, RpcFault, TransactionFault
from cryke.fee_ledger import FeeLedgerClient, checksum
from cryke.launch_client import LaunchClient, LaunchParams, LaunchResult
from cryke.wallet_store import WalletStore, normalize_symbol

logger = logging.getLogger(__name__)


# ==================== LAUNCH ====================

@dataclass
class LaunchRequest:
    name: str
    symbol: str
    description: str
    wallet: Optional[str] = None
    image: Optional[str] = None
    website: Optional[str] = None
    twitter: Optional[str] = None


@dataclass
class LaunchOutcome:
    result: LaunchResult
    wallet_address: str
    key_path: Optional[Path] = None
    wallet_created: bool = False
    announcements: Dict[str, bool] = field(default_factory=dict)


def _resolve_wallet(request: LaunchRequest, store: WalletStore):
    """Returns (address, key_path, created)."""
    if request.wallet:
        address = checksum(request.wallet, "wallet address")
        step("WALLET", f"Using provided wallet: {address}")
        return address, None, False

    resolved = store.resolve_or_create(request.symbol)
    if resolved.created:
        step("WALLET", "No wallet provided - created one for you")
        success(f"Wallet created: {resolved.address}")
        step("SECURITY", f"Private key saved to: {resolved.path}")
        warn("BACK UP THIS FILE! If you lose it, you lose access to your fees.")
    else:
        step("WALLET", f"Found existing wallet for {normalize_symbol(request.symbol)}: {resolved.address}")
    return resolved.address, resolved.path, resolved.created


def _validate(request: LaunchRequest, wallet: str):
    missing = [f for f in ("name", "symbol", "description") if not getattr(request, f)]
    if missing:
        raise ConfigFault(f"Missing required arguments: {', '.join('--' + m for m in missing)}")

    step("VALIDATE", "Checking token parameters...")
    info(f"Name: {request.name}")
    info(f"Symbol: {request.symbol.upper()}")
    info(f"Wallet: {wallet}")
    desc = request.description
    info(f"Description: {desc[:60]}{'...' if len(desc) > 60 else ''}")
    if request.image:
        info(f"Image: {request.image}")


def _print_deployed(result: LaunchResult):
    success("TOKEN DEPLOYED ON BASE!")
    info(f"Token Address: {result.token_address}")
    if result.pool_address:
        info(f"Pool: {result.pool_address}")
    if result.dexscreener_url:
        info(f"DexScreener: {result.dexscreener_url}")
    if result.deploy_tx_hash:
        info(f"Transaction: {tx_url(result.deploy_tx_hash)}")


def _summarize(outcome: LaunchOutcome):
    result = outcome.result
    banner("✅ TOKEN LAUNCH COMPLETE!")
    print(f"\n📍 Token Address: {result.token_address}")
    print(f"💰 Fee Wallet: {outcome.wallet_address}")
    print("💵 Your Share: 80% of all trading fees")
    print("🔄 Fee Token: WETH (accumulates automatically)")
    if result.dexscreener_url:
        print(f"📊 Chart: {result.dexscreener_url}")
    if result.deploy_tx_hash:
        print(f"🔗 Tx: {tx_url(result.deploy_tx_hash)}")
    if outcome.key_path:
        print(f"\n🔐 WALLET FILE: {outcome.key_path}")
        print("   This file is the only way to claim your fees later.")
        if outcome.wallet_created:
            print(f"   {C.YELLOW}⚠️  BACK THIS UP NOW!{C.END}")
    print("\nTo claim fees later:")
    print(f"  cryke-fees claim {result.token_address}")
    print("\nYour token is LIVE. You're now earning from every trade. 🚀\n")


def launch(request: LaunchRequest, config: Config,
           store: Optional[WalletStore] = None,
           client: Optional[LaunchClient] = None,
           publishers: Optional[List[Publisher]] = None) -> LaunchOutcome:
    """Run the launch flow. DeploymentFault propagates; announcements never do."""
    store = store or WalletStore(config.wallets_dir)
    client = client or LaunchClient(config.launch_api_url, timeout=config.request_timeout)
    if publishers is None:
        publishers = publishers_from_config(config)

    banner("🦗 CRYKE TOKEN LAUNCHER")

    wallet, key_path, created = _resolve_wallet(request, store)
    _validate(request, wallet)

    step("LAUNCH", "Calling Cryke API to deploy token on Base...")
    params = LaunchParams(
        name=request.name,
        symbol=request.symbol,
        wallet=wallet,
        description=request.description,
        image=request.image,
        website=request.website,
        twitter=request.twitter,
    )
    result = client.deploy(params)
    _print_deployed(result)

    outcome = LaunchOutcome(result=result, wallet_address=wallet,
                            key_path=key_path, wallet_created=created)

    step("SOCIAL", "Checking for social platform credentials...")
    if not publishers:
        info("No social credentials found - skipping announcements")
        info(f"Set {', '.join(PUBLISHER_ENV_VARS[:-1])}, or {PUBLISHER_ENV_VARS[-1]} to auto-announce")
    else:
        event = LaunchEvent(
            name=request.name,
            symbol=request.symbol.upper(),
            description=request.description,
            wallet=wallet,
            token_address=result.token_address,
            dexscreener_url=result.dexscreener_url,
        )
        outcome.announcements = AnnouncementFanout(publishers).announce(event)
        posted = sum(outcome.announcements.values())
        logger.info(f"Announcements: {posted}/{len(publishers)} posted")

    _summarize(outcome)
    return outcome


# ==================== FEES ====================

@dataclass
class AssetFees:
    label: str
    unit: str
    asset: str
    amount: Optional[int] = None
    error: Optional[str] = None

    @property
    def display(self) -> str:
        return f"{Web3.from_wei(self.amount or 0, 'ether')} {self.unit}"


@dataclass
class FeeReport:
    owner: str
    assets: List[AssetFees]

    @property
    def ok(self) -> bool:
        return all(a.error is None for a in self.assets)

    def amount(self, asset: str) -> Optional[int]:
        for a in self.assets:
            if a.asset.lower() == asset.lower():
                return a.amount
        return None


@dataclass
class ClaimOutcome:
    asset: AssetFees
    status: str  # claimed | skipped | failed
    tx_hash: Optional[str] = None
    error: Optional[str] = None


@dataclass
class ClaimReport:
    fees: FeeReport
    claims: List[ClaimOutcome]

    @property
    def claimed(self) -> List[ClaimOutcome]:
        return [c for c in self.claims if c.status == "claimed"]

    @property
    def failed(self) -> List[ClaimOutcome]:
        return [c for c in self.claims if c.status == "failed"]

    @property
    def ok(self) -> bool:
        return not self.failed


def signer_from_config(config: Config, purpose: str = "claim fees"):
    secret = config.require_private_key(purpose)
    try:
        return Account.from_key(secret)
    except (ValueError, TypeError) as e:
        raise ConfigFault(f"BASE_PRIVATE_KEY is not a valid private key: {e}") from e


def check_fees(ledger: FeeLedgerClient, fee_owner: str, token_address: str) -> FeeReport:
    """Read WETH and token fees owed to `fee_owner`. A failed read marks only that asset."""
    owner = checksum(fee_owner, "fee owner")
    token = checksum(token_address, "token address")

    print(f"Checking fees for wallet: {owner}")
    print(f"Token: {token}\n")

    assets = [AssetFees("WETH", "WETH", Web3.to_checksum_address(WETH_ADDRESS))]
    if token != assets[0].asset:
        assets.append(AssetFees("Token", "tokens", token))

    for fees in assets:
        try:
            fees.amount = ledger.query_claimable(owner, fees.asset)
            print(f"{fees.label} fees available: {fees.display}")
        except RpcFault as e:
            fees.error = str(e)
            logger.error(f"Reading {fees.label} fees failed: {e}")
            print(f"{C.RED}{fees.label} fees could not be read: {e}{C.END}")

    return FeeReport(owner=owner, assets=assets)


def _claim_one(ledger: FeeLedgerClient, signer, owner: str, fees: AssetFees,
               timeout: Optional[float]) -> ClaimOutcome:
    print(f"\nClaiming {fees.label} fees...")
    tx_hash = None
    try:
        tx_hash = ledger.submit_claim(signer, owner, fees.asset)
        print(f"TX: {tx_url(tx_hash)}")
        ledger.await_confirmation(tx_hash, timeout=timeout)
    except TransactionFault as e:
        logger.error(f"{fees.label} claim failed: {e}")
        print(f"{C.RED}❌ {fees.label} claim failed: {e}{C.END}")
        return ClaimOutcome(fees, "failed", tx_hash=e.tx_hash or tx_hash, error=str(e))

    success(f"{fees.label} claimed!")
    return ClaimOutcome(fees, "claimed", tx_hash=tx_hash)


def claim_fees(token_address: str, config: Config,
               ledger: Optional[FeeLedgerClient] = None) -> ClaimReport:
    """Claim every positive balance for the signer in `config`. Zero is not an error."""
    signer = signer_from_config(config)
    ledger = ledger or FeeLedgerClient(config.rpc_url)

    print(f"Wallet: {signer.address}")
    print(f"Token: {token_address}\n")

    fees = check_fees(ledger, signer.address, token_address)

    claims = []
    for asset in fees.assets:
        if asset.error is not None:
            claims.append(ClaimOutcome(asset, "failed", error=asset.error))
        elif asset.amount and asset.amount > 0:
            claims.append(_claim_one(ledger, signer, fees.owner, asset, config.receipt_timeout))
        else:
            claims.append(ClaimOutcome(asset, "skipped"))

    if all(c.status == "skipped" for c in claims):
        print("\nNo fees to claim. Keep promoting your token!")

    return ClaimReport(fees=fees, claims=claims)
