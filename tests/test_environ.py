import os
from dataclasses import dataclass

import pytest

import kv_environ
from kv_environ import (
    InMemoryStore,
    IntegerParseError,
    marshal,
    marshal_and_set,
    marshal_map,
    unmarshal,
    unmarshal_os,
    unmarshal_os_and_unset,
)
from kv_environ.__main__ import main


@dataclass
class Config:
    addr: str
    port: int


def test_marshal() -> None:
    assert marshal(Config("someOtherHost.net", 8090)) == ["ADDR=someOtherHost.net", "PORT=8090"]


def test_marshal_map() -> None:
    out = marshal_map(Config("someOtherHost.net", 8090))
    assert out == {"ADDR": "someOtherHost.net", "PORT": "8090"}


def test_marshal_map_with_prefix() -> None:
    out = marshal_map(Config("h", 1), "__PFX__")
    assert out == {"__PFX__ADDR": "h", "__PFX__PORT": "1"}


def test_marshal_and_set_writes_store() -> None:
    store = InMemoryStore({"KEEP": "1"})
    marshal_and_set(Config("h", 1), "APP_", store=store)
    assert store.entries() == ["APP_ADDR=h", "APP_PORT=1", "KEEP=1"]


def test_marshal_and_set_defaults_to_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(os, "environ", {})
    marshal_and_set(Config("h", 1))
    assert os.environ == {"ADDR": "h", "PORT": "1"}


def test_unmarshal() -> None:
    assert unmarshal(Config, ["ADDR=localhost", "PORT=8080"]) == Config("localhost", 8080)
    assert unmarshal(Config, {"_PFX_ADDR": "localhost", "_PFX_PORT": "8080"}, "_PFX_") == Config("localhost", 8080)


def test_unmarshal_os_reads_without_unsetting() -> None:
    store = InMemoryStore({"ADDR": "localhost", "PORT": "8080"})
    assert unmarshal_os(Config, store=store) == Config("localhost", 8080)
    assert len(store.entries()) == 2


def test_unmarshal_os_defaults_to_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(os, "environ", {"ADDR": "localhost", "PORT": "8080"})
    assert unmarshal_os(Config) == Config("localhost", 8080)
    assert len(os.environ) == 2


def test_unmarshal_os_and_unset_purges_consumed_keys() -> None:
    store = InMemoryStore({"ADDR": "localhost", "PORT": "8080", "OTHER": "x"})
    assert unmarshal_os_and_unset(Config, store=store) == Config("localhost", 8080)
    assert store.entries() == ["OTHER=x"]


def test_unmarshal_os_and_unset_with_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(os, "environ", {"_PFX_ADDR": "localhost", "_PFX_PORT": "8080", "ADDR": "kept"})
    assert unmarshal_os_and_unset(Config, "_PFX_") == Config("localhost", 8080)
    assert os.environ == {"ADDR": "kept"}


def test_unmarshal_os_and_unset_keeps_store_on_failure() -> None:
    store = InMemoryStore({"ADDR": "localhost", "PORT": "eighty"})
    with pytest.raises(IntegerParseError):
        _ = unmarshal_os_and_unset(Config, store=store)
    assert store.entries() == ["ADDR=localhost", "PORT=eighty"]


def test_package_exports_version() -> None:
    assert isinstance(kv_environ.__version__, str)


def test_cli_lists_prefixed_entries(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(os, "environ", {"APP_PORT": "1", "APP_HOST": "h", "OTHER": "x"})
    main(["--prefix", "APP_"])
    assert capsys.readouterr().out == "HOST=h\nPORT=1\n"


def test_cli_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        main(["--version"])
    assert capsys.readouterr().out.strip() == kv_environ.__version__
