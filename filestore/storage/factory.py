"""
Storage factory for creating storage providers and services.

This module provides factory functions for creating storage providers
and services based on configuration.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from .providers.base import StorageProvider
from .providers.filesystem import FilesystemStorageProvider
from .root import StorageRoot
from .service import StorageService, DEFAULT_MAX_UPLOAD_BYTES

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/storage.yaml")


class StorageConfigurationError(Exception):
    """Exception raised for storage configuration errors."""
    pass


def load_storage_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load storage configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to configuration file (default: $FILESTORE_CONFIG
            or config/storage.yaml)

    Returns:
        Configuration dictionary

    Raises:
        StorageConfigurationError: If configuration loading fails
    """
    try:
        if config_path is None:
            config_path = Path(os.getenv('FILESTORE_CONFIG', DEFAULT_CONFIG_PATH))

        if not config_path.exists():
            raise StorageConfigurationError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)

        if not config or 'storage' not in config:
            raise StorageConfigurationError("Invalid configuration: missing 'storage' section")

        return _apply_environment_overrides(config)

    except StorageConfigurationError:
        raise
    except yaml.YAMLError as e:
        raise StorageConfigurationError(f"YAML parsing error: {e}") from e
    except Exception as e:
        raise StorageConfigurationError(f"Configuration loading failed: {e}") from e


def _apply_environment_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Environment variables follow the pattern: FILESTORE_<KEY>

    Args:
        config: Base configuration dictionary

    Returns:
        Configuration with environment overrides applied
    """
    storage_type = os.getenv('FILESTORE_STORAGE_TYPE')
    if storage_type:
        config['storage']['type'] = storage_type
        logger.info(f"Storage type overridden by environment: {storage_type}")

    fs_path = os.getenv('FILESTORE_STORAGE_PATH')
    if fs_path:
        config['storage'].setdefault('filesystem', {})['path'] = fs_path
        logger.info(f"Storage path overridden by environment: {fs_path}")

    max_bytes = os.getenv('FILESTORE_MAX_UPLOAD_BYTES')
    if max_bytes:
        config['storage'].setdefault('filesystem', {})['max_upload_bytes'] = int(max_bytes)
        logger.info(f"Upload size ceiling overridden by environment: {max_bytes}")

    return config


def create_storage_provider(config: Dict[str, Any]) -> StorageProvider:
    """
    Create storage provider based on configuration.

    Args:
        config: Storage configuration dictionary

    Returns:
        StorageProvider instance

    Raises:
        StorageConfigurationError: If provider creation fails
    """
    try:
        storage_config = config['storage']
        provider_type = storage_config.get('type', 'filesystem')

        if provider_type == 'filesystem':
            return _create_filesystem_provider(storage_config)
        raise StorageConfigurationError(f"Unknown storage provider type: {provider_type}")

    except StorageConfigurationError:
        raise
    except KeyError as e:
        raise StorageConfigurationError(f"Missing required configuration key: {e}") from e
    except Exception as e:
        raise StorageConfigurationError(f"Provider creation failed: {e}") from e


def _create_filesystem_provider(storage_config: Dict[str, Any]) -> FilesystemStorageProvider:
    """
    Create filesystem storage provider.

    Args:
        storage_config: Storage section of configuration

    Returns:
        FilesystemStorageProvider instance
    """
    fs_config = storage_config.get('filesystem') or {}

    # Relative paths stay relative so reported file paths read "uploads/<name>"
    storage_path = Path(fs_config.get('path', 'uploads'))

    logger.info(f"Creating filesystem storage provider: path={storage_path} ({storage_path.resolve()})")

    return FilesystemStorageProvider(StorageRoot(path=storage_path))


def create_storage_service(config: Dict[str, Any], provider: Optional[StorageProvider] = None) -> StorageService:
    """
    Create storage service with provider and upload limits.

    Args:
        config: Storage configuration dictionary
        provider: Optional storage provider (will be created if not provided)

    Returns:
        StorageService instance

    Raises:
        StorageConfigurationError: If service creation fails
    """
    try:
        if provider is None:
            provider = create_storage_provider(config)

        fs_config = config['storage'].get('filesystem') or {}
        max_upload_bytes = int(fs_config.get('max_upload_bytes', DEFAULT_MAX_UPLOAD_BYTES))

        logger.info(f"Creating storage service with upload ceiling: {max_upload_bytes} bytes")

        return StorageService(provider, max_upload_bytes)

    except StorageConfigurationError:
        raise
    except Exception as e:
        raise StorageConfigurationError(f"Service creation failed: {e}") from e


def create_default_storage_service(config_path: Optional[Path] = None) -> StorageService:
    """
    Create storage service with default configuration.

    This is the main entry point for creating a storage service with
    configuration loaded from file and environment overrides.

    Args:
        config_path: Optional path to configuration file

    Returns:
        StorageService instance ready for use

    Raises:
        StorageConfigurationError: If configuration or creation fails
    """
    try:
        config = load_storage_config(config_path)
        return create_storage_service(config)

    except Exception as e:
        logger.error(f"Failed to create default storage service: {e}")
        raise StorageConfigurationError(f"Default service creation failed: {e}") from e
