"""Reading post submissions from multipart forms or JSON bodies."""

from typing import Any, Optional

from fastapi import Request
from starlette.datastructures import UploadFile

from quill.domain.error import ValidationError
from quill.domain.service import BlobUpload

COVER_FIELD = "coverImage"
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


async def _to_upload(upload: UploadFile) -> Optional[BlobUpload]:
    data = await upload.read()
    # Browsers send an empty part when no file was chosen
    if not data and not upload.filename:
        return None
    return BlobUpload(
        data=data,
        filename=upload.filename or "",
        content_type=upload.content_type or "application/octet-stream",
    )


async def read_submission(
    request: Request,
) -> tuple[dict[str, Any], Optional[BlobUpload]]:
    """Collect submitted post fields and the cover image, if any.

    Repeated form keys (`tags=a&tags=b`) and bracketed keys (`tags[]=a`)
    are gathered into lists; everything else is passed through as received.

    Returns:
        Raw fields keyed by wire name, and the uploaded cover image

    Raises:
        ValidationError: If a JSON body is malformed or not an object
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        fields: dict[str, Any] = {}
        cover: Optional[BlobUpload] = None
        for key in dict.fromkeys(form.keys()):
            name = key[:-2] if key.endswith("[]") else key
            values = form.getlist(key)
            files = [v for v in values if isinstance(v, UploadFile)]
            if files:
                if name == COVER_FIELD:
                    cover = await _to_upload(files[0])
                continue
            if key.endswith("[]") or len(values) > 1:
                fields[name] = list(values)
            else:
                fields[name] = values[0]
        return fields, cover

    body = await request.body()
    if not body.strip():
        return {}, None
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError("Malformed JSON body")
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload, None
