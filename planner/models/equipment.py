from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from planner.models import Base, TimestampMixin, UuidPrimaryKeyMixin


class EquipmentFolder(UuidPrimaryKeyMixin, TimestampMixin, Base):
    """Equipment folder. Folders nest one level deep.

    Attributes:
        name: Folder name, e.g. "Mixers" or "Surface".
        parent_id: Main folder of a subfolder; NULL for main folders.
    """

    __tablename__ = "equipment_folders"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    parent_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("equipment_folders.id"),
        nullable=True,
        index=True,
    )


class Equipment(UuidPrimaryKeyMixin, TimestampMixin, Base):
    """Equipment item with a stock count.

    Attributes:
        name: Display name.
        stock: Units owned; NULL is treated as 0.
        folder_id: Folder the item is filed under, if any.
    """

    __tablename__ = "equipment"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    stock: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)
    folder_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False), ForeignKey(EquipmentFolder.id), nullable=True, index=True
    )
    folder: Mapped[EquipmentFolder | None] = relationship(EquipmentFolder)
