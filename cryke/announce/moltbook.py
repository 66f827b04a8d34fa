"""Moltbook launch post"""
from cryke.announce import LaunchEvent, Publisher


class MoltbookPublisher(Publisher):
    name = "Moltbook"
    url = "https://www.moltbook.com/api/v1/posts"

    def __init__(self, api_key: str, timeout: float = 30, submolt: str = "general"):
        super().__init__(api_key, timeout)
        self.submolt = submolt

    def build_payload(self, event: LaunchEvent) -> dict:
        return {
            "submolt": self.submolt,
            "title": f"Launched ${event.symbol.upper()} via Cryke",
            "content": f"{event.description}\n\nToken: {event.token_address}\n\n80% of trading fees forever.",
        }

    def accepted(self, result: dict) -> bool:
        return bool(result.get("success") or result.get("id"))
