from playgrounds.stores.interfaces import PlaygroundStore
from playgrounds.stores.memory_store import MemoryPlaygroundStore

__all__ = ["PlaygroundStore", "MemoryPlaygroundStore"]
