"""Process-wide cache of the loaded signing key material."""

import logging
import threading

from jrp.core.errors import KeyAccessError
from jrp.crypto.keystore import KeyStoreLoader
from jrp.crypto.types import KeyMaterial, KeyStoreConfig

logger = logging.getLogger(__name__)


class KeyMaterialStore:
    """Holds one immutable KeyMaterial and swaps it on explicit reload.

    Readers take the current reference without locking. ``reload`` is
    serialised by a lock and publishes the new material with a single
    assignment, so concurrent readers observe either the old or the new
    material, never a mix of both.
    """

    def __init__(self, config: KeyStoreConfig, loader: KeyStoreLoader | None = None) -> None:
        self._config = config
        self._loader = loader or KeyStoreLoader()
        self._material: KeyMaterial | None = None
        self._lock = threading.Lock()

    @property
    def config(self) -> KeyStoreConfig:
        return self._config

    @property
    def loaded(self) -> bool:
        return self._material is not None

    @property
    def current(self) -> KeyMaterial:
        """The cached material; raises if nothing has been loaded yet."""
        material = self._material
        if material is None:
            raise KeyAccessError(f"key material for alias {self._config.alias!r} is not loaded")
        return material

    def load(self) -> KeyMaterial:
        """Load the material if it is not cached yet."""
        with self._lock:
            if self._material is None:
                self._material = self._loader.load(self._config)
            return self._material

    def reload(self) -> KeyMaterial:
        """Re-read the key container and replace the cached material.

        On failure the previously loaded material stays in place and the
        error propagates to the caller.
        """
        with self._lock:
            material = self._loader.load(self._config)
            self._material = material
        logger.info("Reloaded key material for alias %s", self._config.alias)
        return material
