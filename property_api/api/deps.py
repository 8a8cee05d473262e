"""Request-scoped dependencies shared by the API routes."""

import json
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from fastapi import Request
from starlette.datastructures import UploadFile

from property_api.core.exceptions import InvalidRequest
from property_api.services.uploads import ImageStore, resolve_upload

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@dataclass
class PropertyPayload:
    """Fields and optional image of a create request, whatever its encoding."""

    fields: dict[str, Any] = field(default_factory=dict)
    image: UploadFile | None = None


def get_image_store(request: Request) -> ImageStore:
    """Get the image store attached to the running app."""
    return request.app.state.image_store


async def get_property_payload(request: Request) -> AsyncIterator[PropertyPayload]:
    """Read a create body sent as JSON, url-encoded or multipart form data."""
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        try:
            fields = {key: value for key, value in form.items() if isinstance(value, str)}
            yield PropertyPayload(fields=fields, image=resolve_upload(form.get("image")))
        finally:
            await form.close()
        return

    body = await request.body()
    if not body.strip():
        yield PropertyPayload()
        return

    try:
        data = json.loads(body)
    except ValueError:
        raise InvalidRequest("Request body must be valid JSON") from None
    if not isinstance(data, dict):
        raise InvalidRequest("Request body must be a JSON object")
    yield PropertyPayload(fields=data)
