"""
Launch Client - deploys a token through the Cryke launch API
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from cryke.errors import DeploymentFault

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchParams:
    name: str
    symbol: str
    wallet: str
    description: str
    image: Optional[str] = None
    website: Optional[str] = None
    twitter: Optional[str] = None

    def to_body(self) -> Dict[str, str]:
        body = {
            "name": self.name,
            "symbol": self.symbol.upper(),
            "wallet": self.wallet,
            "description": self.description,
        }
        if self.image:
            body["image"] = self.image
        if self.website:
            body["website"] = self.website
        if self.twitter:
            body["twitter"] = self.twitter
        return body


@dataclass(frozen=True)
class LaunchResult:
    token_address: str
    pool_address: Optional[str] = None
    dexscreener_url: Optional[str] = None
    deploy_tx_hash: Optional[str] = None

    @classmethod
    def from_api(cls, token: Dict[str, Any]) -> "LaunchResult":
        return cls(
            token_address=token["address"],
            pool_address=token.get("pool"),
            dexscreener_url=token.get("dexscreener"),
            deploy_tx_hash=token.get("transaction"),
        )


class LaunchClient:
    """Client for the Cryke launch API."""

    def __init__(self, api_url: str, timeout: float = 30):
        self.api_url = api_url
        self.timeout = timeout

    def deploy(self, params: LaunchParams) -> LaunchResult:
        missing = [f for f in ("name", "symbol", "description") if not getattr(params, f)]
        if missing:
            raise DeploymentFault(f"Missing required launch fields: {', '.join(missing)}")

        body = params.to_body()
        logger.info(f"POST {self.api_url} symbol={body['symbol']} wallet={body['wallet']}")
        try:
            response = requests.post(
                self.api_url,
                headers={"Content-Type": "application/json"},
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise DeploymentFault(f"Launch API unreachable: {e}") from e

        try:
            result = response.json()
        except ValueError:
            result = {}
        if not isinstance(result, dict):
            result = {}

        if not response.ok or not result.get("success"):
            message = result.get("error") or f"API returned {response.status_code}"
            raise DeploymentFault(message, status_code=response.status_code)

        token = result.get("token")
        if not isinstance(token, dict) or not token.get("address"):
            raise DeploymentFault("Launch API reported success without a token address",
                                  status_code=response.status_code)

        launched = LaunchResult.from_api(token)
        logger.info(f"Deployed {body['symbol']} at {launched.token_address}")
        return launched
