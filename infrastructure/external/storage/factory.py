"""Storage provider factory with registry pattern."""
from typing import Callable, Awaitable
import importlib

from core.logging_config import get_logger
from .base import StorageProvider
from .config import StorageConfig, StorageType
from .exceptions import ConfigurationError

logger = get_logger(__name__)

# Provider builder type
ProviderBuilder = Callable[[StorageConfig], Awaitable[StorageProvider]]

# Registry for storage providers
_provider_registry: dict[str, ProviderBuilder] = {}

_BUILTIN_PROVIDERS = [
    (StorageType.S3, "infrastructure.external.storage.providers.s3", "build_s3_provider"),
]


def register_provider(
    storage_type: str,
    builder: ProviderBuilder
) -> None:
    """Register a storage provider builder.

    Args:
        storage_type: Type of storage provider
        builder: Async function to build provider instance
    """
    _provider_registry[str(getattr(storage_type, "value", storage_type))] = builder
    logger.info("Registered storage provider", provider=str(getattr(storage_type, "value", storage_type)))


async def create_provider(config: StorageConfig) -> StorageProvider:
    """Create storage provider instance based on config.

    Raises:
        ConfigurationError: If provider type not registered or creation fails
    """
    storage_type = str(getattr(config.type, "value", config.type))
    if storage_type not in _provider_registry:
        _auto_register_providers()

        if storage_type not in _provider_registry:
            raise ConfigurationError(
                f"Storage provider '{storage_type}' not registered. "
                f"Available: {list(_provider_registry.keys())}"
            )

    builder = _provider_registry[storage_type]

    try:
        provider = await builder(config)
    except ConfigurationError:
        raise
    except Exception as e:
        logger.error(
            "Failed to create storage provider",
            provider=storage_type,
            error=str(e)
        )
        raise ConfigurationError(
            f"Failed to create storage provider '{storage_type}': {e}"
        ) from e

    logger.info(
        "Created storage provider",
        provider=storage_type,
        bucket=config.bucket,
        endpoint=config.endpoint_url,
    )
    return provider


def _auto_register_providers() -> None:
    """Auto-register built-in storage providers."""
    for storage_type, module_path, builder_name in _BUILTIN_PROVIDERS:
        if storage_type.value in _provider_registry:
            continue
        module = importlib.import_module(module_path)
        register_provider(storage_type, getattr(module, builder_name))
