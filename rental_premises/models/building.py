"""
Building model for rental premises listings.
Handles listing data, ownership, approval status and the photo collection.
"""

from sqlalchemy import String, Integer, Boolean, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from rental_premises.database import Base
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from rental_premises.models.user import User
    from rental_premises.models.image import Image


class Building(Base):
    """
    Rental premises listing.

    Owned by the user who submitted it and pending (``approved`` is False)
    until an administrator reviews it.
    """

    __tablename__ = "buildings"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Premises name"
    )

    location: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Premises location/address"
    )

    price: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Rental price"
    )

    approved: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
        comment="Whether an administrator approved the listing"
    )

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who owns this listing"
    )

    preview_image_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="ID of the image shown in listing summaries"
    )

    # Relationships
    owner: Mapped["User"] = relationship(
        "User",
        back_populates="buildings",
        lazy="selectin"
    )

    images: Mapped[List["Image"]] = relationship(
        "Image",
        back_populates="building",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Image.id"
    )

    def __init__(self, **kwargs):
        kwargs.setdefault("images", [])
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        """String representation of the building."""
        return f"<Building(id={self.id}, name={self.name}, price={self.price})>"

    def add_image(self, image: "Image") -> None:
        self.images.append(image)

    @property
    def preview_image(self) -> Optional["Image"]:
        """Image referenced by ``preview_image_id``, if any."""
        for image in self.images:
            if image.id == self.preview_image_id:
                return image
        return None

    def choose_preview_image(self) -> Optional["Image"]:
        """
        Pick the image that should represent the listing.

        The image flagged as preview (the facade) wins; otherwise the first
        attached image. Returns None when nothing is attached.
        """
        for image in self.images:
            if image.preview_image:
                return image
        return self.images[0] if self.images else None

    def to_dict(self, include_images: bool = False) -> dict:
        """
        Convert building to dictionary.

        Args:
            include_images: Whether to include image metadata

        Returns:
            Dictionary representation of building
        """
        result = {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "price": self.price,
            "approved": self.approved,
            "user_id": self.user_id,
            "owner_username": self.owner.username if self.owner else None,
            "preview_image_id": self.preview_image_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

        if include_images:
            result["images"] = [image.to_dict() for image in self.images]

        return result


# Composite index for the listing filter (location and price with approval)
location_price_index = Index(
    "idx_buildings_location_price",
    Building.location,
    Building.price,
    Building.approved
)
