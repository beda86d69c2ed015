"""Decodes generated artifacts and writes them to disk concurrently."""

import asyncio
import base64
import binascii
import logging
import random
import string
from pathlib import Path

import aiofiles
import aiofiles.os

from stabilityclient.interfaces import ArtifactStore
from stabilityclient.models.errors import FileSaveError
from stabilityclient.models.responses import Artifact, Artifacts, FinishReason

logger = logging.getLogger(__name__)

FILENAME_LENGTH = 10
FILE_EXTENSION = ".png"
_FILENAME_ALPHABET = string.ascii_letters + string.digits

CONTENT_FILTERED_MESSAGE = (
    "FinishReason::CONTENT_FILTERED: Your request activated the API's safety filters "
    "and could not be processed. Please modify the prompt and try again."
)
GENERATION_ERROR_MESSAGE = "FinishReason::ERROR: the engine reported an error while generating this image."


class LocalArtifactStore:
    """Writes artifacts to the local filesystem with aiofiles."""

    async def ensure_directory(self, directory: Path) -> None:
        if not await aiofiles.os.path.isdir(directory):
            await aiofiles.os.makedirs(directory, exist_ok=True)

    def unique_path(self, directory: Path) -> Path:
        name = "".join(random.choices(_FILENAME_ALPHABET, k=FILENAME_LENGTH))
        return directory / f"{name}{FILE_EXTENSION}"

    async def write_bytes(self, path: Path, data: bytes) -> None:
        # Exclusive create: a name collision fails instead of overwriting
        async with aiofiles.open(path, "xb") as f:
            await f.write(data)


class ArtifactService:
    """Materializes Artifacts into files, best-effort per item."""

    def __init__(self, store: ArtifactStore | None = None):
        """
        Initialize artifact service.

        Args:
            store: Persistence sink (LocalArtifactStore if not provided)
        """
        self.store = store or LocalArtifactStore()

    async def save(self, artifact: Artifact, directory: str | Path) -> Path:
        """
        Decode one artifact and write it into ``directory``.

        Returns:
            Path of the written file

        Raises:
            FileSaveError: For filtered/failed generations, bad base64, or write errors
        """
        directory = Path(directory)
        await self._ensure_directory(directory)
        return await self._save_one(artifact, directory)

    async def save_all(self, artifacts: Artifacts, directory: str | Path) -> list[Path]:
        """
        Save every artifact concurrently.

        A failing artifact never stops the others from being attempted.

        Returns:
            Paths of all written files (order not tied to input order)

        Raises:
            FileSaveError: If the directory cannot be created, or if any artifact
                failed; the aggregated error lists every failure
        """
        directory = Path(directory)
        await self._ensure_directory(directory)

        results = await asyncio.gather(
            *(self._save_one(artifact, directory) for artifact in artifacts.artifacts),
            return_exceptions=True,
        )

        paths: list[Path] = []
        failures: list[str] = []
        for result in results:
            if isinstance(result, FileSaveError):
                failures.append(result.message)
            elif isinstance(result, BaseException):
                failures.append(f"failed to save file: {str(result)}")
            else:
                paths.append(result)

        if failures:
            logger.warning(
                f"⚠️ [ArtifactService] {len(failures)} of {len(results)} artifacts failed to save"
            )
            raise FileSaveError.aggregate(failures)

        logger.debug(f"💾 [ArtifactService] Saved {len(paths)} artifacts to {directory}")
        return paths

    async def _ensure_directory(self, directory: Path) -> None:
        try:
            await self.store.ensure_directory(directory)
        except OSError as e:
            raise FileSaveError(
                f"failed to create directory: {str(e)}, path: {directory}",
                original_exception=e,
            )

    async def _save_one(self, artifact: Artifact, directory: Path) -> Path:
        if artifact.finish_reason == FinishReason.CONTENT_FILTERED:
            raise FileSaveError(CONTENT_FILTERED_MESSAGE)
        if artifact.finish_reason == FinishReason.ERROR:
            raise FileSaveError(GENERATION_ERROR_MESSAGE)

        try:
            data = await asyncio.to_thread(base64.b64decode, artifact.encoded_data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise FileSaveError(
                f"failed to decode artifact (seed {artifact.seed}): {str(e)}",
                original_exception=e,
            )

        path = self.store.unique_path(directory)
        try:
            await self.store.write_bytes(path, data)
        except OSError as e:
            raise FileSaveError(f"{str(e)}, path: {path}", original_exception=e)

        logger.debug(f"💾 [ArtifactService] Wrote {len(data)} bytes to {path}")
        return path
