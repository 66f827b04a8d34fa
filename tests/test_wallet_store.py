import json
import os
import stat

import pytest
from eth_account import Account

from cryke.errors import ConfigFault, StorageFault
from cryke.wallet_store import WalletStore


@pytest.fixture
def store(tmp_path):
    return WalletStore(tmp_path / "wallets")


def test_creates_wallet_file_with_owner_only_permissions(store):
    resolved = store.resolve_or_create("tkn")

    assert resolved.created is True
    assert resolved.path.name == "TKN.json"
    mode = stat.S_IMODE(os.stat(resolved.path).st_mode)
    assert mode == 0o600

    data = json.loads(resolved.path.read_text())
    assert data["symbol"] == "TKN"
    assert data["address"] == resolved.address
    assert data["createdAt"]
    assert "KEEP THIS FILE SAFE" in data["note"]
    assert Account.from_key(data["privateKeySecret"]).address == resolved.address


def test_second_lookup_returns_same_wallet(store):
    first = store.resolve_or_create("ABC")
    second = store.resolve_or_create("abc")

    assert second.created is False
    assert second.address == first.address
    assert second.record.private_key == first.record.private_key


def test_existing_file_is_returned_unchanged_and_not_rewritten(store):
    store.wallets_dir.mkdir(parents=True)
    path = store.wallets_dir / "FOO.json"
    stored = {
        "symbol": "FOO",
        "address": "0x" + "ab" * 20,
        "privateKeySecret": "0x" + "22" * 32,
        "createdAt": "2024-01-01T00:00:00+00:00",
        "note": "mine",
    }
    path.write_text(json.dumps(stored))
    before = path.stat().st_mtime_ns

    resolved = store.resolve_or_create("FOO")

    assert resolved.created is False
    # stored, not re-derived from the key
    assert resolved.address == "0x" + "ab" * 20
    assert path.stat().st_mtime_ns == before
    assert json.loads(path.read_text()) == stored
    assert os.listdir(store.wallets_dir) == ["FOO.json"]


def test_accepts_legacy_private_key_field(store):
    store.wallets_dir.mkdir(parents=True)
    (store.wallets_dir / "OLD.json").write_text(json.dumps({
        "symbol": "OLD",
        "address": "0x" + "cd" * 20,
        "privateKey": "0x" + "33" * 32,
    }))

    record = store.load("old")

    assert record.address == "0x" + "cd" * 20
    assert record.private_key == "0x" + "33" * 32


def test_unparseable_file_is_moved_aside_not_overwritten(store):
    store.wallets_dir.mkdir(parents=True)
    path = store.wallets_dir / "BAD.json"
    path.write_text("{not json")

    resolved = store.resolve_or_create("BAD")

    assert resolved.created is True
    backups = [p for p in store.wallets_dir.iterdir() if p.name.startswith("BAD.json.corrupt-")]
    assert len(backups) == 1
    assert backups[0].read_text() == "{not json"
    assert json.loads(path.read_text())["address"] == resolved.address


def test_missing_symbol_is_config_fault(store):
    with pytest.raises(ConfigFault):
        store.resolve_or_create("  ")


def test_path_like_symbol_is_rejected(store):
    with pytest.raises(ConfigFault):
        store.resolve_or_create("../evil")


def test_unwritable_directory_is_storage_fault(tmp_path):
    blocker = tmp_path / "wallets"
    blocker.write_text("not a directory")

    with pytest.raises(StorageFault):
        WalletStore(blocker).resolve_or_create("TKN")


def _write_foo(store, record):
    store.wallets_dir.mkdir(parents=True, exist_ok=True)
    path = store.wallets_dir / "FOO.json"
    path.write_text(json.dumps(record))
    return path


def test_unreadable_file_is_storage_fault_and_left_alone(store, monkeypatch):
    path = _write_foo(store, {
        "symbol": "FOO",
        "address": "0x" + "ab" * 20,
        "privateKeySecret": "0x" + "22" * 32,
    })
    before = path.read_text()

    def denied(*args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr("cryke.wallet_store.open", denied, raising=False)

    with pytest.raises(StorageFault):
        store.resolve_or_create("FOO")

    assert os.listdir(store.wallets_dir) == ["FOO.json"]
    assert path.read_text() == before


@pytest.mark.parametrize("record", [
    {"symbol": "FOO", "address": None, "privateKeySecret": "0x" + "22" * 32},
    {"symbol": "FOO", "address": "0x1234", "privateKeySecret": "0x" + "22" * 32},
    {"symbol": "FOO", "address": "0x" + "ab" * 20, "privateKeySecret": ""},
    {"symbol": "FOO", "address": "0x" + "ab" * 20},
    ["not", "a", "record"],
])
def test_record_with_bad_fields_is_quarantined(store, record):
    _write_foo(store, record)

    resolved = store.resolve_or_create("FOO")

    assert resolved.created is True
    assert Account.from_key(resolved.record.private_key).address == resolved.address
    names = sorted(os.listdir(store.wallets_dir))
    assert names[0] == "FOO.json"
    assert len(names) == 2 and names[1].startswith("FOO.json.corrupt-")
