"""Provider backed by a privilege model file, with reload on change.

Each get_context call compares the file checksum with the one last loaded.
If the file changed, the model is reloaded and a new context is built.

On reload failure (invalid JSON, schema error, file removed) the last good
context stays active and a warning is logged. The first load has no
fallback, so its errors propagate.
"""

from __future__ import annotations

__all__ = ["FileContextProvider"]

import asyncio
import logging
from pathlib import Path

from privileged.pdp.comparer import StringComparer
from privileged.pdp.context import PrivilegeContext
from privileged.utils.privileges import compute_model_checksum, load_model

logger = logging.getLogger(__name__)


class FileContextProvider:
    """Serves the context of a model file, reloading when its content changes.

    File I/O runs in a worker thread. A lock serializes reloads so concurrent
    callers never load the same change twice.

    Attributes:
        path: Model file being served.
        checksum: Checksum of the loaded content, None before the first load.
        reload_count: Number of successful loads, the first one included.
    """

    def __init__(self, path: Path, comparer: StringComparer | None = None) -> None:
        self._path = Path(path)
        self._comparer = comparer
        self._context: PrivilegeContext | None = None
        self._checksum: str | None = None
        self._reload_count = 0
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def checksum(self) -> str | None:
        return self._checksum

    @property
    def reload_count(self) -> int:
        return self._reload_count

    async def get_context(self, principal: str | None = None) -> PrivilegeContext:
        """Return the current context, reloading first if the file changed.

        The principal is ignored; every caller shares the file's rules.

        Raises:
            FileNotFoundError: If the file is missing on first load.
            ValueError: If the file is invalid on first load.
        """
        async with self._lock:
            try:
                checksum = await asyncio.to_thread(compute_model_checksum, self._path)
            except OSError as e:
                if self._context is None:
                    raise
                self._log_reload_failed(type(e).__name__, str(e))
                return self._context

            if self._context is not None and checksum == self._checksum:
                return self._context

            return await self._load(checksum)

    async def reload(self) -> bool:
        """Force a reload regardless of checksum.

        Returns:
            True if the file was loaded, False if loading failed and the
            previous context was kept.
        """
        async with self._lock:
            previous = self._context
            try:
                checksum = await asyncio.to_thread(compute_model_checksum, self._path)
            except OSError as e:
                if previous is None:
                    raise
                self._log_reload_failed(type(e).__name__, str(e))
                return False
            return await self._load(checksum) is not previous

    async def _load(self, checksum: str) -> PrivilegeContext:
        """Load the file and return the context now in effect.

        On failure after a first successful load, the previous context.
        """
        try:
            model = await asyncio.to_thread(load_model, self._path)
        except (OSError, ValueError) as e:
            if self._context is None:
                raise
            self._log_reload_failed(type(e).__name__, str(e))
            return self._context

        self._context = PrivilegeContext.from_model(model, self._comparer)
        self._checksum = checksum
        self._reload_count += 1
        logger.info(
            {
                "event": "privilege_model_loaded",
                "path": str(self._path),
                "rules": len(model.rules),
                "aliases": len(model.aliases),
                "checksum": checksum,
            }
        )
        return self._context

    def _log_reload_failed(self, error_type: str, error: str) -> None:
        logger.warning(
            {
                "event": "privilege_model_reload_failed",
                "error_type": error_type,
                "error": error,
                "path": str(self._path),
            }
        )
