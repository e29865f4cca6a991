# folio/app/api/forms.py
"""
Raw request body reading for the admin endpoints.

Several admin routes accept either JSON or multipart form data on the same
path, so they read the body themselves and hand the plain field dict to
schemas.base.decode().
"""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from starlette.datastructures import UploadFile


@dataclass
class RequestBody:
    fields: Dict[str, Any] = field(default_factory=dict)
    files: Dict[str, UploadFile] = field(default_factory=dict)
    is_multipart: bool = False

    def file(self, name: str) -> Optional[UploadFile]:
        return self.files.get(name)


def is_form_request(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.startswith("multipart/form-data") or content_type.startswith(
        "application/x-www-form-urlencoded"
    )


async def read_body(request: Request) -> RequestBody:
    """Parse a JSON object or a form; empty file inputs are dropped."""
    if is_form_request(request):
        form = await request.form()
        body = RequestBody(is_multipart=True)
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if value.filename:
                    body.files[key] = value
            else:
                body.fields[key] = value
        return body

    raw = await request.body()
    if not raw:
        return RequestBody()
    try:
        data = json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON body")
    if not isinstance(data, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Expected a JSON object")
    return RequestBody(fields=data)
