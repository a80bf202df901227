# app/core/storage_utils.py
import logging

import httpx
from supabase import Client, StorageException

from app.core.errors import RemoteError, provider_message
from app.core.supabase_client import supabase_admin

logger = logging.getLogger(__name__)


class StorageBucket:
    """
    Thin wrapper over one Supabase Storage bucket.

    Every provider failure is re-raised as RemoteError carrying the
    provider's message verbatim; callers decide whether it is surfaced
    as an upload failure or a generic remote failure.
    """

    def __init__(self, name: str, client: Client | None = None):
        self.name = name
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = supabase_admin()
        return self._client

    def _bucket(self):
        return self.client.storage.from_(self.name)

    def upload(
        self,
        path: str,
        file_bytes: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> None:
        """
        Upload raw bytes to `path` inside the bucket.

        With upsert=True an existing object at the same path is overwritten.
        """
        options = {"content-type": content_type}
        if upsert:
            options["upsert"] = "true"
        try:
            self._bucket().upload(path, file_bytes, options)
        except (StorageException, httpx.HTTPError) as exc:
            logger.error(f"Upload to {self.name}/{path} failed: {exc}")
            raise RemoteError(provider_message(exc)) from exc

    def get_public_url(self, path: str) -> str:
        """Public URL of an object (no remote round-trip)."""
        return self._bucket().get_public_url(path)

    def list_names(self, search: str) -> list[str]:
        """
        Names of objects at the bucket root whose name contains `search`.
        """
        try:
            entries = self._bucket().list("", {"search": search})
        except (StorageException, httpx.HTTPError) as exc:
            logger.error(f"Listing {self.name} for {search!r} failed: {exc}")
            raise RemoteError(provider_message(exc)) from exc
        return [entry["name"] for entry in entries or []]

    def remove(self, paths: list[str]) -> None:
        """Delete several objects in one call."""
        try:
            self._bucket().remove(paths)
        except (StorageException, httpx.HTTPError) as exc:
            logger.error(f"Removing {len(paths)} object(s) from {self.name} failed: {exc}")
            raise RemoteError(provider_message(exc)) from exc
