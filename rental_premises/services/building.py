"""
Building service: listing creation, lookup, filtering, removal and the approval workflow.
Associates listings with their owners, turns uploads into images and keeps the audit log.
"""

from typing import Optional, List, Protocol
from sqlalchemy.ext.asyncio import AsyncSession
from rental_premises.database import transaction
from rental_premises.models.building import Building
from rental_premises.models.image import Image
from rental_premises.models.user import User
from rental_premises.repositories.building import BuildingRepository, BuildingFilters
from rental_premises.repositories.user import UserRepository
from rental_premises.utils.exceptions import BuildingNotFoundError, UnauthorizedError
import logging

logger = logging.getLogger(__name__)

CREATED_LOG = "Создал помещение: {name}"
APPROVED_LOG = "Одобрил помещение, id = {id}"
REJECTED_LOG = "Не одобрил помещение, id = {id}"


class Attachment(Protocol):
    """What the service needs from an uploaded file (FastAPI's UploadFile fits)."""

    filename: Optional[str]
    content_type: Optional[str]
    size: Optional[int]

    async def read(self, size: int = -1) -> bytes:
        ...


class BuildingService:
    """
    Orchestrates building listings on top of the user and building repositories.

    Lookups fail open (a missing user or building is not an error), while
    approving a missing building fails loudly with BuildingNotFoundError.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.building_repo = BuildingRepository(db_session)
        self.user_repo = UserRepository(db_session)

    async def resolve_current_user(self, username: Optional[str]) -> User:
        """
        Map the caller's username to a stored user.

        Args:
            username: Username from the caller's token, None when unauthenticated

        Returns:
            The stored user, or a fresh never-persisted ``User()`` when the
            caller is unauthenticated or unknown
        """
        logger.info("Resolving current user")
        if username is None:
            return User()

        user = await self.user_repo.find_by_username(username)
        if user is None:
            logger.info(f"User {username} not found")
            return User()

        logger.info(f"User {username} was found")
        return user

    async def create_listing(
        self,
        username: Optional[str],
        building: Building,
        facade_file: Optional[Attachment] = None,
        entrance_file: Optional[Attachment] = None,
        interior_file: Optional[Attachment] = None
    ) -> Building:
        """
        Store a new listing with its photos and record it in the owner's audit log.

        Missing or empty attachments are skipped; the facade photo
        is the preview image. Everything is written in one transaction.

        Args:
            username: Username of the submitting caller
            building: Unsaved building with name, location and price set
            facade_file: Facade photo
            entrance_file: Entrance photo
            interior_file: Interior photo

        Returns:
            The persisted building

        Raises:
            UnauthorizedError: If the caller does not map to a stored user
            OSError: If reading an attachment fails
        """
        user = await self.resolve_current_user(username)
        if user.is_anonymous:
            raise UnauthorizedError("Authentication required to create premises")

        # Uploads are read before the session is touched
        facade = await self._to_image_entity(facade_file)
        if facade is not None:
            facade.preview_image = True
        photos = [facade, await self._to_image_entity(entrance_file), await self._to_image_entity(interior_file)]

        async with transaction(self.db):
            building.owner = user
            for photo in photos:
                if photo is not None:
                    building.add_image(photo)

            saved = await self.building_repo.save(building)
            logger.info(f"Saving building: name = {saved.name}, owner = {user.username}")
            user.add_log(CREATED_LOG.format(name=saved.name))

            preview = saved.choose_preview_image()
            if preview is not None:
                saved.preview_image_id = preview.id
            await self.building_repo.save(saved)

        return saved

    async def remove_listing(self, building_id: int) -> None:
        """Delete a building and its images; unknown ids are ignored."""
        async with transaction(self.db):
            deleted = await self.building_repo.delete_by_id(building_id)
        if deleted:
            logger.info(f"Deleted building {building_id}")

    async def get_listing(self, building_id: int) -> Optional[Building]:
        """Return the building with the given id, or None."""
        return await self.building_repo.get_by_id(building_id)

    async def list_listings(
        self,
        name: Optional[str] = None,
        location: Optional[str] = None,
        max_price: Optional[int] = None,
        approved: Optional[bool] = None
    ) -> List[Building]:
        """
        List buildings matching every supplied criterion.

        Args:
            name: Exact name; None or "" skips the criterion
            location: Exact location; None or "" skips the criterion
            max_price: Inclusive upper price bound
            approved: Required approval state

        Returns:
            Matching buildings, unordered and unpaginated
        """
        filters = BuildingFilters(
            name=name,
            location=location,
            max_price=max_price,
            approved=approved
        )
        return await self.building_repo.search(filters)

    async def set_approval_status(self, building_id: int, approved: bool, admin: User) -> Building:
        """
        Approve or reject a listing and record the decision in the admin's audit log.

        The caller is expected to have checked that ``admin`` really is an
        administrator.

        Raises:
            BuildingNotFoundError: If no building has the given id
        """
        building = await self.building_repo.get_by_id(building_id)
        if building is None:
            raise BuildingNotFoundError(building_id)

        async with transaction(self.db):
            building.approved = approved
            await self.building_repo.save(building)

            template = APPROVED_LOG if approved else REJECTED_LOG
            admin.add_log(template.format(id=building_id))

        logger.info(f"Building {building_id} approved={approved} by {admin.username}")
        return building

    async def _to_image_entity(self, file: Optional[Attachment]) -> Optional[Image]:
        """
        Turn an upload into an unsaved image; None for a missing or empty upload.

        A declared size of zero skips the upload without reading it. When the
        size is unknown the bytes are read and an empty payload is skipped.
        """
        if file is None or file.size == 0:
            return None

        data = await file.read()
        if file.size is None and not data:
            return None

        return Image(
            name=file.filename,
            content_type=file.content_type,
            size=len(data) if file.size is None else file.size,
            data=data
        )
