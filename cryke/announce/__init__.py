"""
Announcements - tell social platforms about a launch.

Each platform is a Publisher; the fan-out posts to all configured
publishers at once, waits for every one to settle and never fails the
launch because of them.
"""
import concurrent.futures
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from cryke.colors import success, warn
from cryke.errors import AnnouncementFault

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchEvent:
    name: str
    symbol: str
    description: str
    wallet: str
    token_address: str
    dexscreener_url: Optional[str] = None


class Publisher(ABC):
    """One social platform. Subclasses define the URL, body and success check."""

    name: str = "publisher"
    url: str = ""

    def __init__(self, api_key: str, timeout: float = 30):
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    @abstractmethod
    def build_payload(self, event: LaunchEvent) -> Dict[str, Any]:
        """Platform-specific JSON body."""

    @abstractmethod
    def accepted(self, result: Dict[str, Any]) -> bool:
        """Whether the platform's response means the post went up."""

    def send(self, event: LaunchEvent) -> Dict[str, Any]:
        """POST the announcement. Raises AnnouncementFault on any failure."""
        try:
            response = requests.post(
                self.url,
                headers=self._headers(),
                json=self.build_payload(event),
                timeout=self.timeout,
            )
            result = response.json()
        except (requests.RequestException, ValueError) as e:
            raise AnnouncementFault(f"{self.name}: {e}") from e

        if not isinstance(result, dict) or not self.accepted(result):
            raise AnnouncementFault(f"{self.name}: rejected (HTTP {response.status_code})")
        return result

    def publish(self, event: LaunchEvent) -> bool:
        try:
            self.send(event)
        except AnnouncementFault as e:
            logger.warning(f"Announcement failed: {e}")
            warn(f"{self.name} announcement failed (non-blocking)")
            return False
        success(f"Announced on {self.name}!")
        return True


class AnnouncementFanout:
    def __init__(self, publishers: List[Publisher]):
        self.publishers = list(publishers)

    def announce(self, event: LaunchEvent) -> Dict[str, bool]:
        """Post everywhere concurrently. Returns {platform: posted}."""
        if not self.publishers:
            return {}

        results = {}
        with concurrent.futures.ThreadPoolExecutor(max_workers=len(self.publishers)) as pool:
            futures = {pool.submit(p.publish, event): p for p in self.publishers}
            for future in concurrent.futures.as_completed(futures):
                publisher = futures[future]
                try:
                    results[publisher.name] = bool(future.result())
                except Exception as e:
                    logger.warning(f"{publisher.name} announcement crashed: {e}")
                    results[publisher.name] = False
        return results


def publishers_from_config(config) -> List[Publisher]:
    """One publisher per platform credential present in `config`."""
    from cryke.announce.fourclaw import FourclawPublisher
    from cryke.announce.moltbook import MoltbookPublisher
    from cryke.announce.moltx import MoltXPublisher

    publishers = []
    if config.moltx_api_key:
        publishers.append(MoltXPublisher(config.moltx_api_key, timeout=config.request_timeout))
    if config.moltbook_api_key:
        publishers.append(MoltbookPublisher(config.moltbook_api_key, timeout=config.request_timeout))
    if config.fourclaw_api_key:
        publishers.append(FourclawPublisher(config.fourclaw_api_key, timeout=config.request_timeout))
    return publishers
