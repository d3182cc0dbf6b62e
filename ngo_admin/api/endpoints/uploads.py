"""
Image upload API endpoint
"""

from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile, status

from ngo_admin.schemas.common import StandardAPIResponse, create_success_response
from ngo_admin.services.image_upload import ImageUploadService, check_image

router = APIRouter()


@router.post("/image", response_model=StandardAPIResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    image: UploadFile = File(...),
    scope: Optional[str] = Form(None, description="Page scope with its own size limit, e.g. 'testimonials'")
):
    """
    Upload an image for an admin record.

    Returns the url under /uploads/ to store in the record's image field.
    """
    # Multipart parsing records the size; reject before reading the body
    if image.size is not None:
        check_image(image.filename, image.content_type, image.size, scope)

    content = await image.read()
    result = await ImageUploadService().save(image.filename, image.content_type, content, scope=scope)
    return create_success_response(result, "Image uploaded successfully")
