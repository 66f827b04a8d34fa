import pytest
from eth_account import Account
from web3 import Web3

from cryke.announce import Publisher
from cryke.config import WETH_ADDRESS, Config
from cryke.errors import AnnouncementFault, RpcFault, TransactionFault
from cryke.launch_client import LaunchResult

TEST_KEY = "0x" + "11" * 32
TOKEN = Web3.to_checksum_address("0x" + "12" * 20)
WETH = Web3.to_checksum_address(WETH_ADDRESS)


@pytest.fixture
def signer():
    return Account.from_key(TEST_KEY)


@pytest.fixture
def config(tmp_path):
    return Config(private_key=TEST_KEY, home_dir=tmp_path / "cryke")


class FakeLedger:
    """In-memory stand-in for FeeLedgerClient."""

    def __init__(self, balances=None, read_errors=(), submit_errors=(), confirm_errors=()):
        self.balances = {k.lower(): v for k, v in (balances or {}).items()}
        self.read_errors = {a.lower() for a in read_errors}
        self.submit_errors = {a.lower() for a in submit_errors}
        self.confirm_errors = {a.lower() for a in confirm_errors}
        self.queries = []
        self.submitted = []
        self.confirmed = []
        self._hash_to_asset = {}

    def query_claimable(self, fee_owner, asset):
        self.queries.append((fee_owner, asset))
        if asset.lower() in self.read_errors:
            raise RpcFault("node unreachable")
        return self.balances.get(asset.lower(), 0)

    def submit_claim(self, signer, fee_owner, asset):
        if asset.lower() in self.submit_errors:
            raise TransactionFault("nonce too low")
        tx_hash = "0x" + f"{len(self.submitted) + 1:064x}"
        self.submitted.append((signer.address, fee_owner, asset))
        self._hash_to_asset[tx_hash] = asset
        return tx_hash

    def await_confirmation(self, tx_hash, timeout=None):
        asset = self._hash_to_asset[tx_hash]
        if asset.lower() in self.confirm_errors:
            raise TransactionFault(f"Transaction {tx_hash} reverted", tx_hash)
        self.confirmed.append(tx_hash)
        return {"status": 1, "transactionHash": tx_hash}


class FakeLaunchClient:
    def __init__(self, result=None, error=None):
        self.result = result or LaunchResult(
            token_address=TOKEN,
            pool_address="0x" + "34" * 20,
            dexscreener_url=f"https://dexscreener.com/base/{TOKEN}",
            deploy_tx_hash="0x" + "ab" * 32,
        )
        self.error = error
        self.calls = []

    def deploy(self, params):
        self.calls.append(params)
        if self.error:
            raise self.error
        return self.result


class FakePublisher(Publisher):
    url = "https://example.invalid/posts"

    def __init__(self, name="Fake", fail=False):
        super().__init__("test-key")
        self.name = name
        self.fail = fail
        self.events = []

    def build_payload(self, event):
        return {"content": event.symbol}

    def accepted(self, result):
        return True

    def send(self, event):
        self.events.append(event)
        if self.fail:
            raise AnnouncementFault(f"{self.name}: rejected (HTTP 500)")
        return {"success": True}
