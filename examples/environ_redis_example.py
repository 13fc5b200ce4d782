"""Minimal example for keeping flat config entries in a Redis-compatible store."""

from dataclasses import dataclass

from kv_environ import RedisStore, marshal_and_set, unmarshal_os


@dataclass
class Config:
    addr: str
    port: int


def main() -> None:
    """Write a config under a namespace and read it back from Redis/Dragonfly."""
    store = RedisStore(url="redis://redis:6379/0", namespace="ep1:")
    try:
        marshal_and_set(Config("localhost", 8080), store=store)
        print("entries:", store.entries())
        print("config:", unmarshal_os(Config, store=store))
        store.clear()
    finally:
        store.close()


if __name__ == "__main__":
    main()
