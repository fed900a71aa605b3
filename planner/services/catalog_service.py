"""Load the equipment and crew catalogs from the database.

Folder hierarchies are flattened into a :class:`GroupPath` here, so nothing
downstream needs to know about folder rows.
"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from planner.models.crew import CrewMember
from planner.models.equipment import Equipment, EquipmentFolder
from planner.schemas.resource import GroupPath, Resource, ResourceKind

UNCATEGORIZED = "Uncategorized"
UNASSIGNED = "Unassigned"


def equipment_group_path(
    folder_id: str | None, folders: dict[str, EquipmentFolder]
) -> GroupPath:
    """Map an equipment folder onto ``(main folder, subfolder)``.

    A subfolder yields its parent as main group. Items without a (known)
    folder go to ``Uncategorized``.
    """
    folder = folders.get(folder_id) if folder_id is not None else None
    if folder is None:
        return GroupPath(main_group=UNCATEGORIZED)

    parent = folders.get(folder.parent_id) if folder.parent_id is not None else None
    if parent is None:
        return GroupPath(main_group=folder.name.strip() or UNCATEGORIZED)
    return GroupPath(
        main_group=parent.name.strip() or UNCATEGORIZED, sub_group=folder.name
    )


async def load_equipment_catalog(db: AsyncSession) -> list[Resource]:
    """Load every equipment item as a planner resource.

    Args:
        db: Async SQLAlchemy session.

    Returns:
        Resources ordered by name; ``stock`` NULL counts as 0.
    """
    folders_stmt: Select[tuple[EquipmentFolder]] = select(EquipmentFolder)
    folder_rows: Sequence[EquipmentFolder] = (
        (await db.execute(folders_stmt)).scalars().all()
    )
    folders = {f.id: f for f in folder_rows}

    items_stmt: Select[tuple[Equipment]] = select(Equipment).order_by(Equipment.name)
    items: Sequence[Equipment] = (await db.execute(items_stmt)).scalars().all()

    return [
        Resource(
            id=str(item.id),
            name=item.name,
            kind=ResourceKind.EQUIPMENT,
            capacity=max(item.stock or 0, 0),
            group_path=equipment_group_path(item.folder_id, folders),
        )
        for item in items
    ]


async def load_crew_catalog(db: AsyncSession) -> list[Resource]:
    """Load every crew member as a planner resource.

    The department (crew folder) is the main group and the primary role the
    subgroup. Members without a folder land in ``Unassigned``.

    Args:
        db: Async SQLAlchemy session.

    Returns:
        Resources ordered by name, each with capacity 1.
    """
    stmt = (
        select(CrewMember)
        .options(selectinload(CrewMember.folder), selectinload(CrewMember.roles))
        .order_by(CrewMember.name)
    )
    members: Sequence[CrewMember] = (await db.execute(stmt)).scalars().unique().all()

    resources: list[Resource] = []
    for member in members:
        roles = tuple(role.name for role in member.roles or ())
        department = member.folder.name if member.folder is not None else ""
        resources.append(
            Resource(
                id=str(member.id),
                name=member.name,
                kind=ResourceKind.CREW,
                group_path=GroupPath(
                    main_group=(department or "").strip() or UNASSIGNED,
                    sub_group=roles[0] if roles else None,
                ),
                roles=roles,
            )
        )
    return resources


async def load_catalog(db: AsyncSession, kind: ResourceKind) -> list[Resource]:
    if kind == ResourceKind.CREW:
        return await load_crew_catalog(db)
    return await load_equipment_catalog(db)
