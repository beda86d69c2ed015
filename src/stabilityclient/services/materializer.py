"""Builds outgoing requests for each attempt.

JSON bodies are serialized directly. Multipart bodies are rebuilt from scratch
on every ``build()`` call: every referenced file is re-read from disk, and no
bytes are cached between attempts.
"""

import json
import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import aiofiles
import httpx
from pydantic import BaseModel

from stabilityclient.models.errors import FileReadError, InvalidArgumentError
from stabilityclient.models.requests import (
    ImageToImageRequest,
    LatentUpscalerUpscaleRequest,
    MaskingRequest,
    RealESRGANUpscaleRequest,
    TextPrompt,
)

logger = logging.getLogger(__name__)

# File parts sent by each multipart request type, in wire order
MULTIPART_FILE_FIELDS: dict[type[BaseModel], tuple[str, ...]] = {
    ImageToImageRequest: ("init_image",),
    MaskingRequest: ("init_image", "mask_image"),
    LatentUpscalerUpscaleRequest: ("image",),
    RealESRGANUpscaleRequest: ("image",),
}


@dataclass
class MultipartForm:
    """Scalar fields plus the paths of the file parts to read."""

    fields: dict[str, str] = field(default_factory=dict)
    files: dict[str, Path] = field(default_factory=dict)


def encode_text_prompts(prompts: Sequence[TextPrompt]) -> dict[str, str]:
    """
    Flatten prompts into ``text_prompts[i][text]`` / ``text_prompts[i][weight]`` fields.

    Prompts with empty text are skipped; ``i`` stays the prompt's original index.
    """
    fields: dict[str, str] = {}
    for idx, prompt in enumerate(prompts):
        if not prompt.text:
            continue
        fields[f"text_prompts[{idx}][text]"] = prompt.text
        if prompt.weight is not None:
            fields[f"text_prompts[{idx}][weight]"] = str(prompt.weight)
    return fields


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def build_form(request: BaseModel) -> MultipartForm:
    """
    Describe the multipart body for a file-upload request.

    Optional fields left unset are omitted entirely.

    Raises:
        InvalidArgumentError: If the request type is not sent as multipart
    """
    file_fields = MULTIPART_FILE_FIELDS.get(type(request))
    if file_fields is None:
        raise InvalidArgumentError(f"{type(request).__name__} cannot be sent as multipart/form-data")

    form = MultipartForm()
    prompts = getattr(request, "text_prompts", None)
    if prompts:
        form.fields.update(encode_text_prompts(prompts))

    scalars = request.model_dump(mode="json", exclude_none=True, exclude={"text_prompts", *file_fields})
    for name, value in scalars.items():
        form.fields[name] = _format_value(value)

    for name in file_fields:
        path = getattr(request, name)
        if path is not None:
            form.files[name] = Path(path)

    return form


async def read_file_part(path: Path) -> tuple[str, bytes, str]:
    """
    Read a file into an httpx file tuple ``(filename, content, content_type)``.

    Raises:
        FileReadError: If the file is missing or unreadable
    """
    try:
        async with aiofiles.open(path, "rb") as f:
            content = await f.read()
    except OSError as e:
        raise FileReadError(f"failed to read file: {str(e)}, path: {path}", original_exception=e)

    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return path.name, content, content_type


class JsonRequestFactory:
    """Request factory for JSON (or bodiless GET) calls; cheap to repeat."""

    def __init__(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[BaseModel] = None,
    ):
        self.method = method.upper()
        self.url = url
        self.headers = dict(headers)
        self.body = body

    async def build(self) -> httpx.Request:
        if self.body is None:
            return httpx.Request(self.method, self.url, headers=dict(self.headers))

        payload = self.body.model_dump(mode="json", by_alias=True, exclude_none=True)
        return httpx.Request(self.method, self.url, headers=dict(self.headers), json=payload)


class MultipartRequestFactory:
    """Request factory for file-upload calls.

    Source files must stay in place for the whole retry window: each attempt
    reads them again.
    """

    def __init__(self, url: str, headers: Mapping[str, str], request: BaseModel):
        self.url = url
        self.headers = dict(headers)
        self.request = request

    async def build(self) -> httpx.Request:
        """
        Build a new multipart POST with freshly read file parts.

        Raises:
            FileReadError: If any referenced file cannot be read
            InvalidArgumentError: If the request type has no multipart form
        """
        form = build_form(self.request)
        files = {name: await read_file_part(path) for name, path in form.files.items()}
        logger.debug(
            f"📎 [Materializer] multipart body: {len(form.fields)} fields, files={list(files)}"
        )
        return httpx.Request(
            "POST",
            self.url,
            headers=dict(self.headers),
            data=form.fields,
            files=files,
        )
