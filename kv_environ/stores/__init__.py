"""Store contracts and implementations."""

from .in_memory import InMemoryStore
from .os_environ import OSEnvironStore
from .protocol import Store
from .redis import RedisStore


__all__ = ["InMemoryStore", "OSEnvironStore", "RedisStore", "Store"]
