"""
HTTP tests for the turf booking API

The real FastAPI app is built with the container's repositories overridden by
the in-memory fakes, so requests go through routing, auth, DI wiring and the
exception handlers without a database.
"""

from datetime import date
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


pytestmark = pytest.mark.unit

FAR_FUTURE = date(2099, 6, 1)
LONG_AGO = date(2020, 6, 1)


@pytest.fixture
def client(
    venue_query_repo,
    venue_command_repo,
    slot_inventory_repo,
    slot_reservation_repo,
    booking_command_repo,
    booking_query_repo,
    idempotency_store,
    review_repo,
    notification_sender,
) -> Iterator[TestClient]:
    container.wire(modules=WIRE_MODULES)
    app = create_app(title_suffix=' (Test)')
    with (
        container.venue_query_repo.override(venue_query_repo),
        container.venue_command_repo.override(venue_command_repo),
        container.slot_inventory_repo.override(slot_inventory_repo),
        container.slot_reservation_repo.override(slot_reservation_repo),
        container.booking_command_repo.override(booking_command_repo),
        container.booking_query_repo.override(booking_query_repo),
        container.idempotency_store.override(idempotency_store),
        container.review_repo.override(review_repo),
        container.notification_sender.override(notification_sender),
    ):
        yield TestClient(app)


def auth_headers(user: UserEntity) -> dict[str, str]:
    return {'Authorization': f'Bearer {JwtAuth().create_jwt_token(user)}'}


class TestCommonEndpoints:
    def test_health(self, client) -> None:
        response = client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'

    def test_metrics_are_exposed(self, client) -> None:
        response = client.get('/metrics')

        assert response.status_code == 200
        assert 'text/plain' in response.headers['content-type']


class TestVenueApi:
    def test_owner_creates_venue_and_generates_slots(self, client, venue_owner) -> None:
        """
        Given: A venue owner
        When: They create a venue and generate slots from 6 to 9
        Then: Three free one hour slots are listed for that date
        """
        # Arrange
        headers = auth_headers(venue_owner)

        # Act
        created = client.post(
            '/api/venue',
            json={
                'name': 'Greenfield Arena',
                'location': 'Koramangala, Bengaluru',
                'sport': 'football',
                'base_price': 500,
                'advance_amount': 200,
                'open_hour': 6,
                'close_hour': 22,
                'slot_duration': 60,
            },
            headers=headers,
        )
        venue_id = created.json()['id']
        generated = client.post(
            f'/api/venue/{venue_id}/slots',
            json={'date': FAR_FUTURE.isoformat(), 'from_hour': 6, 'to_hour': 9},
            headers=headers,
        )
        listed = client.get(
            f'/api/venue/{venue_id}/slots',
            params={'date': FAR_FUTURE.isoformat()},
            headers=headers,
        )

        # Assert
        assert created.status_code == 201
        assert created.json()['owner_id'] == venue_owner.id
        assert generated.status_code == 201
        assert [slot['time_range'] for slot in listed.json()['slots']] == [
            '06:00 - 07:00',
            '07:00 - 08:00',
            '08:00 - 09:00',
        ]
        assert not any(slot['is_booked'] for slot in listed.json()['slots'])

    def test_player_cannot_create_venue(self, client, player) -> None:
        response = client.post(
            '/api/venue',
            json={
                'name': 'Backyard',
                'location': 'Home',
                'sport': 'football',
                'base_price': 100,
                'advance_amount': 0,
                'open_hour': 6,
                'close_hour': 8,
                'slot_duration': 60,
            },
            headers=auth_headers(player),
        )

        assert response.status_code == 403
        assert response.json()['error'] == 'Forbidden'

    def test_unknown_venue_is_404(self, client, player) -> None:
        response = client.get('/api/venue/999', headers=auth_headers(player))

        assert response.status_code == 404
        assert response.json()['error'] == 'NotFound'


class TestReserveApi:
    @pytest.fixture(autouse=True)
    def inventory(self, turf_state) -> None:
        turf_state.add_venue()
        turf_state.add_slot(slot_id=101, start_hour=18, slot_date=FAR_FUTURE)
        turf_state.add_slot(slot_id=102, start_hour=19, slot_date=FAR_FUTURE)

    def test_reserve_creates_one_booking_per_slot(self, client, turf_state, player) -> None:
        # Act
        response = client.post(
            '/api/booking',
            json={'venue_id': 1, 'slot_ids': [101, 102], 'amount': 400},
            headers=auth_headers(player),
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert len(body['booking_ids']) == 2
        assert body['slot_ids'] == [101, 102]
        assert body['total_charged'] == 400
        assert body['total_remaining'] == 600
        assert body['replayed'] is False
        assert turf_state.booked_slot_ids() == {101, 102}

    def test_second_reservation_of_same_slot_is_conflict(self, client, turf_state, player) -> None:
        """
        Given: Slot 101 already reserved by one request
        When: Another request asks for slots 101 and 102
        Then: 409 names slot 101 and slot 102 stays free
        """
        # Arrange
        headers = auth_headers(player)
        client.post(
            '/api/booking', json={'venue_id': 1, 'slot_ids': [101], 'amount': 200}, headers=headers
        )

        # Act
        response = client.post(
            '/api/booking',
            json={'venue_id': 1, 'slot_ids': [101, 102], 'amount': 400},
            headers=headers,
        )

        # Assert
        assert response.status_code == 409
        assert response.json()['error'] == 'Conflict'
        assert response.json()['conflicting_slot_ids'] == [101]
        assert response.json()['retryable'] is False
        assert turf_state.booked_slot_ids() == {101}

    def test_missing_slot_is_partial_inventory(self, client, turf_state, player) -> None:
        response = client.post(
            '/api/booking',
            json={'venue_id': 1, 'slot_ids': [101, 999], 'amount': 400},
            headers=auth_headers(player),
        )

        assert response.status_code == 404
        assert response.json()['error'] == 'PartialInventory'
        assert response.json()['missing_slot_ids'] == [999]
        assert turf_state.booked_slot_ids() == set()

    def test_idempotency_key_replays_the_first_result(self, client, turf_state, player) -> None:
        # Arrange
        headers = {**auth_headers(player), 'Idempotency-Key': 'req-7f3a'}
        payload = {'venue_id': 1, 'slot_ids': [101], 'amount': 200}

        # Act
        first = client.post('/api/booking', json=payload, headers=headers)
        second = client.post('/api/booking', json=payload, headers=headers)

        # Assert
        assert first.status_code == 201
        assert second.status_code == 201
        assert second.json()['booking_ids'] == first.json()['booking_ids']
        assert second.json()['replayed'] is True
        assert len(turf_state.bookings) == 1

    def test_write_failure_is_retryable_and_rolls_back(
        self, client, turf_state, booking_command_repo, player
    ) -> None:
        booking_command_repo.fail_on_create_number = 2

        response = client.post(
            '/api/booking',
            json={'venue_id': 1, 'slot_ids': [101, 102], 'amount': 400},
            headers=auth_headers(player),
        )

        assert response.status_code == 503
        assert response.json()['retryable'] is True
        assert turf_state.booked_slot_ids() == set()
        assert turf_state.bookings == {}

    def test_empty_slot_list_is_invalid_input(self, client, player) -> None:
        response = client.post(
            '/api/booking',
            json={'venue_id': 1, 'slot_ids': [], 'amount': 0},
            headers=auth_headers(player),
        )

        assert response.status_code == 400
        assert response.json()['error'] == 'InvalidInput'

    def test_anonymous_request_is_401(self, client) -> None:
        response = client.post('/api/booking', json={'venue_id': 1, 'slot_ids': [101], 'amount': 200})

        assert response.status_code == 401
        assert response.json()['error'] == 'Authentication'


class TestCancelApi:
    def test_cancel_well_ahead_frees_the_slot(self, client, turf_state, player) -> None:
        # Arrange
        turf_state.add_venue()
        turf_state.add_slot(slot_id=101, slot_date=FAR_FUTURE)
        booking = turf_state.add_booking(slot_id=101, user_id=player.id)

        # Act
        response = client.delete(
            f'/api/booking/{booking.id}',
            params={'reason': 'rain'},
            headers=auth_headers(player),
        )

        # Assert
        assert response.status_code == 200
        assert response.json() == {
            'cancelled_booking_id': str(booking.id),
            'slot_released': True,
            'reason': 'rain',
        }
        assert turf_state.booked_slot_ids() == set()

    def test_cancel_after_start_is_too_late(self, client, turf_state, player) -> None:
        # Arrange
        turf_state.add_venue()
        turf_state.add_slot(slot_id=101, slot_date=LONG_AGO)
        booking = turf_state.add_booking(slot_id=101, user_id=player.id)

        # Act
        response = client.delete(f'/api/booking/{booking.id}', headers=auth_headers(player))

        # Assert
        assert response.status_code == 400
        assert response.json()['error'] == 'TooLate'
        assert booking.id in turf_state.bookings
        assert turf_state.booked_slot_ids() == {101}


class TestBookingQueriesApi:
    @pytest.fixture
    def booking(self, turf_state, player):
        turf_state.add_venue()
        turf_state.add_slot(slot_id=101, slot_date=FAR_FUTURE)
        return turf_state.add_booking(slot_id=101, user_id=player.id)

    def test_my_bookings_include_venue_details(self, client, booking, player) -> None:
        response = client.get('/api/booking/my_booking', headers=auth_headers(player))

        assert response.status_code == 200
        [listed] = response.json()
        assert listed['id'] == str(booking.id)
        assert listed['venue_name'] == 'Greenfield Arena'
        assert listed['time_range'] == '18:00 - 19:00'

    def test_receipt(self, client, booking, player) -> None:
        response = client.get(f'/api/booking/{booking.id}/receipt', headers=auth_headers(player))

        assert response.status_code == 200
        assert response.json()['payer_email'] == 'asha@example.com'
        assert response.json()['total'] == 500

    def test_owner_settles_balance(self, client, booking, venue_owner) -> None:
        response = client.patch(
            f'/api/booking/{booking.id}/settle', headers=auth_headers(venue_owner)
        )

        assert response.status_code == 200
        assert response.json()['amount_remaining'] == 0
        assert response.json()['is_payment_received'] is True


class TestMaintenanceApi:
    def test_admin_triggers_reconcile(self, client, turf_state, admin) -> None:
        """
        Given: A slot flagged reserved with no booking and no reservation time
        When: An admin triggers reconcile
        Then: The slot is released and counted
        """
        # Arrange
        turf_state.add_venue()
        turf_state.add_slot(slot_id=101, is_booked=True)

        # Act
        response = client.post('/api/maintenance/reconcile', headers=auth_headers(admin))

        # Assert
        assert response.status_code == 200
        assert response.json() == {'released': 1}
        assert turf_state.booked_slot_ids() == set()

    def test_player_cannot_trigger_reconcile(self, client, player) -> None:
        response = client.post('/api/maintenance/reconcile', headers=auth_headers(player))

        assert response.status_code == 403


class TestReviewApi:
    @pytest.fixture
    def played_booking(self, turf_state, player):
        turf_state.add_venue()
        turf_state.add_slot(slot_id=101, slot_date=LONG_AGO)
        return turf_state.add_booking(slot_id=101, user_id=player.id)

    def test_player_reviews_then_venue_listing_shows_average(
        self, client, played_booking, player
    ) -> None:
        """
        Given: A booking whose slot was played long ago
        When: The player posts an anonymous 4 star review and the venue reviews are listed
        Then:
          - The review is created and shown as Anonymous without the user id
          - The listing carries the review and an average of 4.0 over 1 review
        """
        # Act
        created = client.post(
            '/api/review',
            json={
                'booking_id': str(played_booking.id),
                'rating': 4,
                'comment': 'Good turf, a bit slippery',
                'is_anonymous': True,
            },
            headers=auth_headers(player),
        )
        listed = client.get('/api/review', params={'venue_id': 1})

        # Assert
        assert created.status_code == 201
        assert created.json()['reviewer_name'] == 'Anonymous'
        assert created.json()['user_id'] is None
        assert listed.status_code == 200
        body = listed.json()
        assert [review['id'] for review in body['reviews']] == [created.json()['id']]
        assert body['pagination'] == {'page': 1, 'limit': 10, 'total': 1, 'pages': 1}
        assert body['average_rating'] == {'average': 4.0, 'total': 1}

    def test_check_then_duplicate_review_is_conflict(
        self, client, turf_state, played_booking, player
    ) -> None:
        # Arrange
        turf_state.add_review(booking=played_booking)

        # Act
        checked = client.get(
            '/api/review/check',
            params={'booking_id': str(played_booking.id)},
            headers=auth_headers(player),
        )
        duplicate = client.post(
            '/api/review',
            json={'booking_id': str(played_booking.id), 'rating': 5, 'comment': 'Again'},
            headers=auth_headers(player),
        )

        # Assert
        assert checked.status_code == 200
        assert checked.json()['can_review'] is False
        assert checked.json()['has_review'] is True
        assert duplicate.status_code == 409

    def test_author_deletes_own_review(self, client, turf_state, played_booking, player) -> None:
        # Arrange
        review = turf_state.add_review(booking=played_booking)

        # Act
        response = client.delete(f'/api/review/{review.id}', headers=auth_headers(player))

        # Assert
        assert response.status_code == 204
        assert turf_state.reviews == {}

    def test_rating_out_of_range_is_rejected(self, client, played_booking, player) -> None:
        response = client.post(
            '/api/review',
            json={'booking_id': str(played_booking.id), 'rating': 9, 'comment': 'Wow'},
            headers=auth_headers(player),
        )

        assert response.status_code == 400
        assert response.json()['error'] == 'InvalidInput'


class TestAnalyticsApi:
    def test_owner_gets_analytics_for_own_venues(self, client, turf_state, venue_owner) -> None:
        # Arrange
        turf_state.add_venue(owner_id=venue_owner.id)
        turf_state.add_slot(slot_id=101, slot_date=FAR_FUTURE)
        turf_state.add_booking(slot_id=101)

        # Act
        response = client.get('/api/analytics', headers=auth_headers(venue_owner))

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body['total_bookings'] == 1
        assert body['total_revenue'] == 0
        assert body['projected_income'] == 500
        assert len(body['peak_days']) == 7

    def test_player_cannot_see_analytics(self, client, player) -> None:
        response = client.get('/api/analytics', headers=auth_headers(player))

        assert response.status_code == 403
