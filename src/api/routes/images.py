from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile

from src.api.deps import get_current_author_id, get_image_uploader, get_rules
from src.api.schemas import ImageResponse
from src.components.images import ImageUploader, UploadedImage, UploadImageInput
from src.rules.models import Rules

router = APIRouter()


@router.post("", response_model=ImageResponse, status_code=201)
def upload_image(
    file: UploadFile = File(...),
    post_slug: str | None = Form(default=None),
    author_id: UUID | None = Depends(get_current_author_id),
    uploader: ImageUploader = Depends(get_image_uploader),
    rules: Rules = Depends(get_rules),
) -> UploadedImage:
    """Upload a post image and return its public URL."""
    # One byte past the limit is enough for the size check to reject it
    data = file.file.read(rules.uploads.max_upload_bytes + 1)
    inp = UploadImageInput(
        author_id=author_id,
        data=data,
        filename=file.filename or "unnamed",
        content_type=file.content_type or "application/octet-stream",
        post_slug=post_slug or None,
    )
    return uploader.upload(inp)
