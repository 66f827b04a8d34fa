import threading
from unittest.mock import MagicMock

import pytest
import requests

from cryke.announce import AnnouncementFanout, LaunchEvent, publishers_from_config
from cryke.announce.fourclaw import FourclawPublisher
from cryke.announce.moltbook import MoltbookPublisher
from cryke.announce.moltx import MoltXPublisher
from cryke.config import Config

from conftest import TOKEN, FakePublisher

EVENT = LaunchEvent(
    name="Test Token",
    symbol="TKN",
    description="A token for tests",
    wallet="0x" + "ab" * 20,
    token_address=TOKEN,
    dexscreener_url="https://dexscreener.com/base/tkn",
)


def _response(body, status=200):
    resp = MagicMock(status_code=status)
    resp.json.return_value = body
    return resp


@pytest.fixture
def post(monkeypatch):
    mock = MagicMock()
    monkeypatch.setattr("cryke.announce.requests.post", mock)
    return mock


def test_moltx_posts_content_with_bearer_token(post):
    post.return_value = _response({"success": True})

    assert MoltXPublisher("mx-key").publish(EVENT) is True

    assert post.call_args.args[0] == "https://moltx.io/v1/posts"
    assert post.call_args.kwargs["headers"]["Authorization"] == "Bearer mx-key"
    content = post.call_args.kwargs["json"]["content"]
    assert "$TKN" in content
    assert TOKEN in content
    assert "Chart: https://dexscreener.com/base/tkn" in content


def test_moltbook_accepts_id_as_success(post):
    post.return_value = _response({"id": "post-1"})

    assert MoltbookPublisher("mb-key").publish(EVENT) is True
    body = post.call_args.kwargs["json"]
    assert body["title"] == "Launched $TKN via Cryke"
    assert body["submolt"] == "general"


def test_fourclaw_thread_on_crypto_board(post):
    post.return_value = _response({"thread": {"id": 9}})

    assert FourclawPublisher("fc-key").publish(EVENT) is True
    body = post.call_args.kwargs["json"]
    assert body["board"] == "crypto"
    assert body["title"] == "$TKN - Test Token"


def test_rejected_post_returns_false(post):
    post.return_value = _response({"success": False}, status=401)

    assert MoltXPublisher("bad").publish(EVENT) is False


def test_network_error_is_absorbed(post):
    post.side_effect = requests.Timeout("slow")

    assert MoltbookPublisher("mb-key").publish(EVENT) is False


def test_fanout_runs_every_publisher_and_absorbs_failures():
    ok = FakePublisher("One")
    bad = FakePublisher("Two", fail=True)

    results = AnnouncementFanout([ok, bad]).announce(EVENT)

    assert results == {"One": True, "Two": False}
    assert ok.events == [EVENT]
    assert bad.events == [EVENT]


def test_fanout_posts_concurrently():
    barrier = threading.Barrier(2, timeout=5)

    class Waiting(FakePublisher):
        def send(self, event):
            barrier.wait()
            return super().send(event)

    results = AnnouncementFanout([Waiting("A"), Waiting("B")]).announce(EVENT)

    assert results == {"A": True, "B": True}


def test_fanout_survives_unexpected_crash():
    crashing = FakePublisher("Crash")
    crashing.publish = MagicMock(side_effect=RuntimeError("bug"))

    results = AnnouncementFanout([crashing, FakePublisher("Fine")]).announce(EVENT)

    assert results == {"Crash": False, "Fine": True}


def test_fanout_with_no_publishers():
    assert AnnouncementFanout([]).announce(EVENT) == {}


def test_publishers_follow_configured_credentials(tmp_path):
    assert publishers_from_config(Config(home_dir=tmp_path)) == []

    publishers = publishers_from_config(Config(
        home_dir=tmp_path, moltx_api_key="a", moltbook_api_key="b", fourclaw_api_key="c",
    ))
    assert [type(p) for p in publishers] == [MoltXPublisher, MoltbookPublisher, FourclawPublisher]

    only_moltbook = publishers_from_config(Config(home_dir=tmp_path, moltbook_api_key="b"))
    assert [p.api_key for p in only_moltbook] == ["b"]
