"""Store — the key/value persistence collaborator.

The store offers three primitives only: a readiness probe, ``get_data``
and ``set_data``. There is no listing, iteration, versioning or
compare-and-swap; callers that need an enumerable set keep their own index.
"""

from skillshare.store.base import KeyValueStore, WriteReceipt
from skillshare.store.file_store import FileStore
from skillshare.store.memory import InMemoryStore

__all__ = ["FileStore", "InMemoryStore", "KeyValueStore", "WriteReceipt"]
