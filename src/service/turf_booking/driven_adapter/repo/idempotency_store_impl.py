from datetime import datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert

from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.dto.reservation_request import (
    RequestState,
    ReservationRequestRecord,
)
from src.service.turf_booking.app.dto.reservation_result import ReservationResult
from src.service.turf_booking.app.interface.i_idempotency_store import IIdempotencyStore
from src.service.turf_booking.driven_adapter.model.reservation_request_model import (
    ReservationRequestModel,
)
from src.service.turf_booking.driven_adapter.repo.sqlalchemy_repo_base import SqlAlchemyRepoBase


class IdempotencyStoreImpl(SqlAlchemyRepoBase, IIdempotencyStore):
    @staticmethod
    def _to_record(db_request: ReservationRequestModel) -> ReservationRequestRecord:
        return ReservationRequestRecord(
            token=db_request.token,
            user_id=db_request.user_id,
            venue_id=db_request.venue_id,
            fingerprint=db_request.fingerprint,
            state=RequestState(db_request.state),
            result=ReservationResult.from_payload(db_request.result) if db_request.result else None,
            created_at=db_request.created_at,
        )

    @Logger.io
    async def claim(self, *, record: ReservationRequestRecord) -> tuple[bool, ReservationRequestRecord]:
        async with self._write_session('claim idempotency token') as session:
            inserted = await session.execute(
                insert(ReservationRequestModel)
                .values(
                    token=record.token,
                    user_id=record.user_id,
                    venue_id=record.venue_id,
                    fingerprint=record.fingerprint,
                    state=RequestState.IN_PROGRESS.value,
                    created_at=record.created_at or func.now(),
                )
                .on_conflict_do_nothing(index_elements=[ReservationRequestModel.token])
                .returning(ReservationRequestModel.token)
            )
            if inserted.scalar_one_or_none() is not None:
                return True, record

            result = await session.execute(
                select(ReservationRequestModel).where(ReservationRequestModel.token == record.token)
            )
            return False, self._to_record(result.scalar_one())

    @Logger.io
    async def complete(self, *, token: str, result: ReservationResult) -> None:
        async with self._write_session('store reservation result') as session:
            await session.execute(
                update(ReservationRequestModel)
                .where(ReservationRequestModel.token == token)
                .values(state=RequestState.COMPLETED.value, result=result.to_payload())
            )

    @Logger.io
    async def release(self, *, token: str) -> None:
        async with self._write_session('release idempotency token') as session:
            await session.execute(
                delete(ReservationRequestModel).where(
                    ReservationRequestModel.token == token,
                    ReservationRequestModel.state == RequestState.IN_PROGRESS.value,
                )
            )

    @Logger.io
    async def take_over(self, *, token: str, stale_before: datetime, claimed_at: datetime) -> bool:
        async with self._write_session('take over idempotency token') as session:
            result = await session.execute(
                update(ReservationRequestModel)
                .where(
                    ReservationRequestModel.token == token,
                    ReservationRequestModel.state == RequestState.IN_PROGRESS.value,
                    ReservationRequestModel.created_at <= stale_before,
                )
                .values(created_at=claimed_at)
                .returning(ReservationRequestModel.token)
            )
            return result.scalar_one_or_none() is not None
