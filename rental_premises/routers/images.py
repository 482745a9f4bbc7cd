"""
Image endpoints serving stored building photos.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from rental_premises.database import get_db
from rental_premises.repositories.image import ImageRepository
from rental_premises.utils.exceptions import ImageNotFoundError

router = APIRouter(prefix="/images", tags=["Images"])


@router.get(
    "/{image_id}",
    summary="Get image bytes",
    description="Return the stored photo with its declared content type.",
    response_class=Response
)
async def get_image(image_id: int, db: AsyncSession = Depends(get_db)) -> Response:
    image = await ImageRepository(db).get_with_data(image_id)
    if image is None:
        raise ImageNotFoundError(image_id)

    return Response(
        content=image.data,
        media_type=image.content_type or "application/octet-stream"
    )
