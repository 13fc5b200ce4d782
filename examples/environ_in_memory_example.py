"""Minimal example for marshalling a config dataclass into an in-memory store."""

from dataclasses import dataclass, field

from kv_environ import InMemoryStore, UInt16, marshal, marshal_and_set, unmarshal_os_and_unset


@dataclass
class Database:
    host: str
    port: UInt16


@dataclass
class Config:
    name: str
    debug: bool
    db: Database
    replicas: list[Database] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    timeout: int | None = None


def main() -> None:
    """Run a marshal/set/unmarshal/unset flow on the in-memory store."""
    config = Config(
        name="svc",
        debug=True,
        db=Database("db.local", 5432),
        replicas=[Database("r1.local", 5432)],
        tags=["blue", "a,b"],
    )
    print("entries:", marshal(config, "APP_"))

    store = InMemoryStore({"UNRELATED": "1"})
    marshal_and_set(config, "APP_", store=store)
    print("store:", store.entries())

    decoded = unmarshal_os_and_unset(Config, "APP_", store=store)
    print(f"{decoded=}")
    print("store after unset:", store.entries())


if __name__ == "__main__":
    main()
