"""
Fee Ledger Client - reads and claims trading fees held by the fee locker.

Reads go through `feesToClaim(owner, asset)`; claims call
`claim(owner, asset)` signed by a local account. Submission and
confirmation are separate steps.
"""
import logging
import time
from typing import Optional

from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import TimeExhausted, TransactionNotFound, Web3Exception

from cryke.config import FEE_LOCKER_ABI, FEE_LOCKER_ADDRESS
from cryke.errors import ConfigFault, RpcFault, TransactionFault

logger = logging.getLogger(__name__)

RECEIPT_POLL_SECONDS = 2


def checksum(address: str, label: str = "address") -> str:
    if not address or not Web3.is_address(address):
        raise ConfigFault(f"Invalid {label}: {address!r}")
    return Web3.to_checksum_address(address)


class FeeLedgerClient:
    def __init__(self, rpc_url: Optional[str] = None, w3: Optional[Web3] = None,
                 locker_address: str = FEE_LOCKER_ADDRESS):
        if w3 is None:
            if not rpc_url:
                raise ConfigFault("An RPC URL is required")
            w3 = Web3(Web3.HTTPProvider(rpc_url))
        self.w3 = w3
        self.contract = self.w3.eth.contract(
            address=Web3.to_checksum_address(locker_address),
            abi=FEE_LOCKER_ABI,
        )

    def query_claimable(self, fee_owner: str, asset: str) -> int:
        """Claimable balance (base units). Untracked assets read as 0."""
        owner = checksum(fee_owner, "fee owner")
        asset = checksum(asset, "asset address")
        try:
            balance = self.contract.functions.feesToClaim(owner, asset).call()
        except (Web3Exception, OSError, ValueError) as e:
            raise RpcFault(f"feesToClaim({owner}, {asset}) failed: {e}") from e
        logger.info(f"feesToClaim owner={owner} asset={asset} -> {balance}")
        return int(balance)

    def submit_claim(self, signer: LocalAccount, fee_owner: str, asset: str) -> str:
        """Sign and broadcast claim(owner, asset). Returns the tx hash without waiting."""
        owner = checksum(fee_owner, "fee owner")
        asset = checksum(asset, "asset address")
        try:
            tx = self.contract.functions.claim(owner, asset).build_transaction({
                "from": signer.address,
                "nonce": self.w3.eth.get_transaction_count(signer.address, "pending"),
            })
            signed = signer.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        except (Web3Exception, OSError, ValueError, TypeError) as e:
            raise TransactionFault(f"claim({owner}, {asset}) could not be submitted: {e}") from e

        tx_hash = Web3.to_hex(tx_hash)
        logger.info(f"Submitted claim owner={owner} asset={asset} tx={tx_hash}")
        return tx_hash

    def await_confirmation(self, tx_hash: str, timeout: Optional[float] = None) -> dict:
        """Block until `tx_hash` is mined. With no timeout this waits forever."""
        try:
            if timeout is not None:
                receipt = self.w3.eth.wait_for_transaction_receipt(
                    tx_hash, timeout=timeout, poll_latency=RECEIPT_POLL_SECONDS
                )
            else:
                receipt = self._poll_receipt(tx_hash)
        except TimeExhausted as e:
            raise TransactionFault(f"Transaction {tx_hash} not mined after {timeout}s", tx_hash) from e
        except (Web3Exception, OSError, ValueError) as e:
            raise TransactionFault(f"Waiting for {tx_hash} failed: {e}", tx_hash) from e

        if receipt["status"] != 1:
            raise TransactionFault(f"Transaction {tx_hash} reverted", tx_hash)
        logger.info(f"Confirmed {tx_hash} in block {receipt.get('blockNumber')}")
        return receipt

    def _poll_receipt(self, tx_hash: str) -> dict:
        while True:
            try:
                return self.w3.eth.get_transaction_receipt(tx_hash)
            except TransactionNotFound:
                time.sleep(RECEIPT_POLL_SECONDS)
