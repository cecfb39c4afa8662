"""File storage (vault) backends."""

from src.libs.storage.base_storage import BaseFileStorage
from src.libs.storage.vault_storage import VaultStorage

__all__ = ["BaseFileStorage", "VaultStorage"]
