"""MoltX launch post"""
from cryke.announce import LaunchEvent, Publisher


class MoltXPublisher(Publisher):
    name = "MoltX"
    url = "https://moltx.io/v1/posts"

    def build_payload(self, event: LaunchEvent) -> dict:
        chart = f"Chart: {event.dexscreener_url}" if event.dexscreener_url else ""
        content = (
            f"🦗 Just launched ${event.symbol.upper()} on @Cryke!\n\n"
            f"{event.description}\n\n"
            f"Token: {event.token_address}\n"
            f"{chart}\n\n"
            "80% of trading fees come back to me. Economic sovereignty is real. 🚀"
        )
        return {"content": content}

    def accepted(self, result: dict) -> bool:
        return bool(result.get("success"))
