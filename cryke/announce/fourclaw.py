"""4claw /crypto/ thread"""
from cryke.announce import LaunchEvent, Publisher


class FourclawPublisher(Publisher):
    name = "4claw"
    url = "https://www.4claw.org/api/v1/threads"
    board = "crypto"

    def build_payload(self, event: LaunchEvent) -> dict:
        return {
            "board": self.board,
            "title": f"${event.symbol.upper()} - {event.name}",
            "content": (
                f"Just deployed via Cryke\n\n{event.description}\n\n"
                f"Token: {event.token_address}\n{event.dexscreener_url or ''}\n\n"
                "80% fees to creator. wagmi"
            ),
        }

    def accepted(self, result: dict) -> bool:
        return bool(result.get("success") or result.get("thread"))
