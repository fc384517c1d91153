"""Store layer - provides persistence for the application.

This module re-exports the public store classes and functions for easy importing.
"""

from continhas.store.blobs import BlobStore, MemoryBlobStore, SqliteBlobStore
from continhas.store.codec import CodecError, decode_settings, decode_years, encode_settings, encode_years
from continhas.store.gateway import SETTINGS_KEY, YEARS_KEY, PersistenceGateway
from continhas.store.schema import database_exists, get_db_path, get_exports_dir, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "get_exports_dir",
    "init_database",
    # Blob stores
    "BlobStore",
    "MemoryBlobStore",
    "SqliteBlobStore",
    # Codec
    "CodecError",
    "decode_settings",
    "decode_years",
    "encode_settings",
    "encode_years",
    # Gateway
    "PersistenceGateway",
    "SETTINGS_KEY",
    "YEARS_KEY",
]
