"""State/store layer.

The workflow keeps all of its state in a small key-value store with
per-key expiry. This package defines the store interface and the
in-process implementation.
"""

from movecar.state.store import KeyValueStore, MemoryStore

__all__ = ["KeyValueStore", "MemoryStore"]
