from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from planner.models.expansion_state import ExpansionStateRecord
from planner.schemas.expansion import (
    ExpansionStatePayload,
    ExpansionStateRead,
    ExpansionToggleRequest,
)
from planner.services.expansion_state import ExpansionState


def _to_read(storage_key: str, state: ExpansionState) -> ExpansionStateRead:
    payload = state.to_payload()
    return ExpansionStateRead(
        storage_key=storage_key, groups=payload.groups, resources=payload.resources
    )


async def load_expansion_state(
    db: AsyncSession, storage_key: str, *, for_update: bool = False
) -> ExpansionState:
    """Load the expansion state stored under ``storage_key``.

    Args:
        db: Async SQLAlchemy session.
        storage_key: View identifier.
        for_update: Lock the stored row until the transaction ends.

    Returns:
        The stored state, or an empty state when nothing is stored yet.
    """
    row = await db.get(ExpansionStateRecord, storage_key, with_for_update=for_update)
    if row is None:
        return ExpansionState()
    return ExpansionState(groups=row.groups or (), resources=row.resources or ())


async def save_expansion_state(
    db: AsyncSession, storage_key: str, state: ExpansionState
) -> ExpansionStateRead:
    """Persist ``state`` under ``storage_key``, replacing what was stored.

    Args:
        db: Async SQLAlchemy session.
        storage_key: View identifier.
        state: State to store.

    Returns:
        The stored state as read model.
    """
    payload = state.to_payload()
    row = await db.get(ExpansionStateRecord, storage_key)
    if row is None:
        row = ExpansionStateRecord(storage_key=storage_key)
        db.add(row)

    row.groups = list(payload.groups)
    row.resources = list(payload.resources)

    await db.commit()
    return _to_read(storage_key, state)


async def get_expansion_state(db: AsyncSession, storage_key: str) -> ExpansionStateRead:
    state = await load_expansion_state(db, storage_key)
    return _to_read(storage_key, state)


async def replace_expansion_state(
    db: AsyncSession, storage_key: str, payload: ExpansionStatePayload
) -> ExpansionStateRead:
    return await save_expansion_state(
        db, storage_key, ExpansionState.from_payload(payload)
    )


async def toggle_expansion_state(
    db: AsyncSession, storage_key: str, request: ExpansionToggleRequest
) -> ExpansionStateRead:
    """Apply one toggle to the stored state and persist the result.

    The stored row is read with ``SELECT ... FOR UPDATE`` so concurrent toggles
    of the same key apply one after the other. Two first writes for a key that
    has no row yet still race; the loser fails on the primary key.

    Args:
        db: Async SQLAlchemy session.
        storage_key: View identifier.
        request: Group or resource to toggle.

    Returns:
        The updated state.
    """
    state = await load_expansion_state(db, storage_key, for_update=True)
    if request.group_key is not None:
        state.toggle_group(
            request.group_key,
            expand_all_subgroups=request.expand_all_subgroups,
            subgroup_keys=request.subgroup_keys,
        )
    else:
        state.toggle_resource(request.resource_id)
    return await save_expansion_state(db, storage_key, state)
