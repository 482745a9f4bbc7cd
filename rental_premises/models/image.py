"""
Image model for photos attached to a building listing.
The raw bytes are stored in the relational record together with their metadata.
"""

from sqlalchemy import String, Integer, Boolean, LargeBinary, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from rental_premises.database import Base
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from rental_premises.models.building import Building


class Image(Base):
    """
    Uploaded photo owned by exactly one building.
    Images are never modified after creation and go away with their building.
    """

    __tablename__ = "images"

    building_id: Mapped[int] = mapped_column(
        ForeignKey("buildings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the building this image belongs to"
    )

    name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Name of the uploaded file"
    )

    content_type: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        comment="Declared MIME type"
    )

    size: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Size in bytes"
    )

    data: Mapped[bytes] = mapped_column(
        LargeBinary,
        nullable=False,
        deferred=True,
        comment="Raw image bytes"
    )

    preview_image: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="True only for the facade photo"
    )

    building: Mapped["Building"] = relationship(
        "Building",
        back_populates="images"
    )

    def __repr__(self) -> str:
        return f"<Image(id={self.id}, building_id={self.building_id}, name={self.name})>"

    def to_dict(self) -> dict:
        """Image metadata without the payload."""
        return {
            "id": self.id,
            "building_id": self.building_id,
            "name": self.name,
            "content_type": self.content_type,
            "size": self.size,
            "preview_image": self.preview_image,
        }
