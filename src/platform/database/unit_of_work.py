"""
Unit of Work: one session and one transaction shared by several repositories.

Usage:
    async with uow:
        await uow.booking_command_repo.delete_by_venue(venue_id=venue_id)
        await uow.slot_inventory_repo.delete_by_venue(venue_id=venue_id)
        await uow.venue_command_repo.delete(venue_id=venue_id)
        await uow.commit()

Leaving the block without commit rolls everything back.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, AsyncContextManager, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import WriteFailureError


if TYPE_CHECKING:
    from src.service.turf_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
    from src.service.turf_booking.app.interface.i_slot_inventory_repo import ISlotInventoryRepo
    from src.service.turf_booking.app.interface.i_venue_command_repo import IVenueCommandRepo


class AbstractUnitOfWork(abc.ABC):
    venue_command_repo: IVenueCommandRepo
    slot_inventory_repo: ISlotInventoryRepo
    booking_command_repo: IBookingCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory
        self._session_cm: Optional[AsyncContextManager[AsyncSession]] = None
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.turf_booking.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.turf_booking.driven_adapter.repo.slot_inventory_repo_impl import (
            SlotInventoryRepoImpl,
        )
        from src.service.turf_booking.driven_adapter.repo.venue_command_repo_impl import (
            VenueCommandRepoImpl,
        )

        self._session_cm = self.session_factory()
        self.session = await self._session_cm.__aenter__()

        # Repositories share the UoW session and leave commit to the UoW
        self.venue_command_repo = VenueCommandRepoImpl()
        self.venue_command_repo.session = self.session
        self.slot_inventory_repo = SlotInventoryRepoImpl()
        self.slot_inventory_repo.session = self.session
        self.booking_command_repo = BookingCommandRepoImpl()
        self.booking_command_repo.session = self.session

        return await super().__aenter__()

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._session_cm is not None:
                await self._session_cm.__aexit__(*args)
            self._session_cm = None
            self.session = None

    async def _commit(self) -> None:
        if self.session is None:
            raise RuntimeError('Unit of work used outside its context')
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            raise WriteFailureError('Could not commit transaction') from e

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
