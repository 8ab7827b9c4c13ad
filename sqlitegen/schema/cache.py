"""Process-lifetime cache of SchemaDescriptors keyed by entity type.

Descriptors are built once per entity type on first use and shared freely
afterwards; they are immutable, so concurrent readers need no locking.  Only
the first construction is serialized.

Example::

    from sqlitegen.schema.cache import DescriptorCache
    from sqlitegen.schema.converters import descriptor_from_sqlalchemy

    descriptors = DescriptorCache(descriptor_from_sqlalchemy)
    users = descriptors.get(User)     # built on first call
    assert descriptors.get(User) is users
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from sqlitegen.schema.descriptor import SchemaDescriptor

logger = logging.getLogger(__name__)

#: Builds the descriptor for an entity type.
DescriptorProvider = Callable[[type], SchemaDescriptor]


class DescriptorCache:
    """Caches the :class:`SchemaDescriptor` of each entity type.

    Args:
        provider: Callable producing the descriptor for an entity type.
    """

    def __init__(self, provider: DescriptorProvider) -> None:
        self._provider = provider
        self._descriptors: dict[type, SchemaDescriptor] = {}
        self._lock = threading.Lock()

    def get(self, entity_type: type) -> SchemaDescriptor:
        """Return the cached descriptor, building it on first use.

        A failing provider leaves the cache unchanged.
        """
        descriptor = self._descriptors.get(entity_type)
        if descriptor is not None:
            return descriptor
        with self._lock:
            descriptor = self._descriptors.get(entity_type)
            if descriptor is None:
                descriptor = self._provider(entity_type)
                self._descriptors[entity_type] = descriptor
                logger.debug(
                    "Cached descriptor for %s (table %s)",
                    entity_type.__name__,
                    descriptor.table_name,
                )
        return descriptor

    def __contains__(self, entity_type: type) -> bool:
        return entity_type in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)
