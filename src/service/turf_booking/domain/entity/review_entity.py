from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import InvalidInputError
from src.platform.logging.loguru_io import Logger


MAX_COMMENT_LENGTH = 1000


def _validate_rating(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if not 1 <= value <= 5:
        raise InvalidInputError('Rating must be between 1 and 5')


def _validate_comment(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise InvalidInputError('Review comment cannot be empty')
    if len(value) > MAX_COMMENT_LENGTH:
        raise InvalidInputError(f'Comment must be at most {MAX_COMMENT_LENGTH} characters')


@attrs.define(frozen=True)
class Review:
    """
    A player's rating of a venue, tied to one of their bookings.

    One review per booking. ``is_verified`` is always True here because a review
    can only be written against a real booking.
    """

    id: UUID
    user_id: int
    venue_id: int
    booking_id: UUID
    rating: int = attrs.field(validator=_validate_rating)
    comment: str = attrs.field(validator=_validate_comment)
    reviewer_name: str = ''
    is_anonymous: bool = False
    is_verified: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user_id: int,
        venue_id: int,
        booking_id: UUID,
        rating: int,
        comment: str,
        reviewer_name: str = '',
        is_anonymous: bool = False,
    ) -> 'Review':
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            user_id=user_id,
            venue_id=venue_id,
            booking_id=booking_id,
            rating=rating,
            comment=comment,
            reviewer_name=reviewer_name,
            is_anonymous=is_anonymous,
            created_at=now,
            updated_at=now,
        )

    @Logger.io
    def revise(self, *, rating: int, comment: str, is_anonymous: bool) -> 'Review':
        return attrs.evolve(
            self,
            rating=rating,
            comment=comment,
            is_anonymous=is_anonymous,
            updated_at=datetime.now(timezone.utc),
        )

    @property
    def display_name(self) -> str:
        return 'Anonymous' if self.is_anonymous else self.reviewer_name

    def is_written_by(self, user_id: int) -> bool:
        return self.user_id == user_id
