"""
Factory classes for creating sanitizer components based on configuration.
"""

from typing import Callable, Dict, List, Optional, Type

from .models.config import RewriteConfig, StorageConfig
from .storage.interface import ResultStore
from .storage.memory import InMemoryResultStore
from .storage.local import LocalResultStore
from .services.catalog import RuleCatalog
from .exceptions import ConfigurationException


class ResultStoreFactory:
    """Factory for creating result store instances based on configuration."""

    # Registry of available result store implementations
    _store_registry: Dict[str, Type[ResultStore]] = {
        "memory": InMemoryResultStore,
        "local": LocalResultStore,
    }

    @classmethod
    def create_result_store(
        cls,
        config: StorageConfig,
        observability_manager=None
    ) -> Optional[ResultStore]:
        """
        Create a result store instance based on configuration.

        Args:
            config: Storage configuration
            observability_manager: Optional observability manager passed to stores that log

        Returns:
            Result store instance, or None when no store is configured

        Raises:
            ConfigurationException: If the store type is not supported
        """
        if config.store_type is None:
            return None

        store_type = config.store_type.lower()
        if store_type not in cls._store_registry:
            raise ConfigurationException(
                f"Unsupported store type '{store_type}'. "
                f"Available types: {cls.get_available_store_types()}"
            )

        store_class = cls._store_registry[store_type]

        try:
            if store_type == "local":
                return store_class(
                    storage_path=config.storage_path,
                    observability_manager=observability_manager
                )
            if store_type == "memory":
                return store_class()
            # Stores registered later take the storage path only
            return store_class(storage_path=config.storage_path)
        except OSError as e:
            raise ConfigurationException(
                f"Failed to create {store_type} result store: {str(e)}"
            )

    @classmethod
    def register_store_type(cls, store_type: str, store_class: Type[ResultStore]) -> None:
        """
        Register a new result store type.

        Args:
            store_type: Name of the store type
            store_class: Result store class to register
        """
        if not issubclass(store_class, ResultStore):
            raise ConfigurationException("Store class must implement ResultStore")

        cls._store_registry[store_type.lower()] = store_class

    @classmethod
    def get_available_store_types(cls) -> List[str]:
        return list(cls._store_registry.keys())

    @classmethod
    def is_store_type_supported(cls, store_type: str) -> bool:
        return store_type.lower() in cls._store_registry


class RuleCatalogFactory:
    """Factory for loading the rule catalog named by configuration."""

    _catalog_registry: Dict[str, Callable[[], RuleCatalog]] = {
        "default": RuleCatalog.default,
    }

    @classmethod
    def create_catalog(cls, config: RewriteConfig) -> RuleCatalog:
        """
        Create the rule catalog for a rewrite configuration.

        A ``catalog_path`` naming a registered catalog builds that catalog;
        any other value is read as a JSON rule table.

        Args:
            config: Rewrite configuration

        Returns:
            Rule catalog

        Raises:
            CatalogException: If the rule table cannot be loaded
        """
        source = config.catalog_path or "default"
        if source in cls._catalog_registry:
            return cls._catalog_registry[source]()

        return RuleCatalog.from_json_file(source)

    @classmethod
    def register_catalog(cls, name: str, builder: Callable[[], RuleCatalog]) -> None:
        """
        Register a named catalog builder.

        Args:
            name: Name used as ``catalog_path``
            builder: Zero-argument callable returning a catalog
        """
        if not callable(builder):
            raise ConfigurationException("Catalog builder must be callable")

        cls._catalog_registry[name] = builder

    @classmethod
    def get_available_catalogs(cls) -> List[str]:
        return list(cls._catalog_registry.keys())
