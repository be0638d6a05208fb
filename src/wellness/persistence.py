"""Debounced, fire-and-forget persistence of the wellness state.

Every store mutation calls ``schedule()``. Writes are batched behind a short
debounce and run in a worker thread, so an in-flight chat turn never waits on
disk. Failures are logged and swallowed.
"""

import asyncio

import structlog

from db import BlobStore

from .store import WellnessStore

logger = structlog.get_logger()

DEFAULT_DEBOUNCE_SECONDS = 0.1


class DebouncedPersister:
    """Writes ``store.to_blobs()`` to a BlobStore after changes settle."""

    def __init__(
        self,
        store: WellnessStore,
        blobs: BlobStore,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ):
        self.store = store
        self.blobs = blobs
        self.debounce_seconds = debounce_seconds
        self._pending: asyncio.Task | None = None
        self.write_count = 0

    def attach(self) -> "DebouncedPersister":
        """Subscribe to store changes."""
        self.store.subscribe(self.schedule)
        return self

    def hydrate(self) -> None:
        """Load previously persisted state into the store."""
        try:
            data = self.blobs.load_all()
        except Exception as e:
            logger.warning("persistence_hydrate_failed", error=str(e))
            return
        if data:
            self.store.load_blobs(data)
            logger.info("persistence_hydrated", keys=sorted(data))

    def schedule(self) -> None:
        """(Re)start the debounce timer. Outside an event loop, write immediately."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.write_now()
            return
        if self._pending and not self._pending.done():
            self._pending.cancel()
        self._pending = loop.create_task(self._write_later())

    async def _write_later(self):
        try:
            await asyncio.sleep(self.debounce_seconds)
        except asyncio.CancelledError:
            return
        await self._write_in_thread()

    async def _write_in_thread(self) -> None:
        # Snapshot on the loop thread; only the disk writes leave it
        documents = self._documents()
        if documents is not None:
            await asyncio.to_thread(self._write, documents)

    def _documents(self) -> dict | None:
        try:
            return self.store.to_blobs()
        except Exception as e:
            logger.warning("persistence_snapshot_failed", error=str(e))
            return None

    def write_now(self) -> None:
        """Persist every key synchronously."""
        documents = self._documents()
        if documents is not None:
            self._write(documents)

    def _write(self, documents: dict) -> None:
        """A failing key does not stop the others."""
        for key, value in documents.items():
            try:
                self.blobs.set(key, value)
            except Exception as e:
                logger.warning("persistence_write_failed", key=key, error=str(e))
        self.write_count += 1

    async def flush(self) -> None:
        """Write any pending state now (call on shutdown)."""
        if self._pending and not self._pending.done():
            self._pending.cancel()
            self._pending = None
            await self._write_in_thread()
