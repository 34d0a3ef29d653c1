"""
Unit tests for the JSON error payloads produced by the exception handlers
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.exception.exceptions import (
    ConflictError,
    PartialInventoryError,
    TooLateError,
    WriteFailureError,
)


pytestmark = pytest.mark.unit


class _Payload(BaseModel):
    amount: int


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get('/conflict')
    async def conflict() -> None:
        raise ConflictError('Some slots are already booked', conflicting_slot_ids=[3, 4])

    @app.get('/partial')
    async def partial() -> None:
        raise PartialInventoryError('Some slots do not exist', missing_slot_ids=[9])

    @app.get('/too-late')
    async def too_late() -> None:
        raise TooLateError('Cancellation window has closed')

    @app.get('/write-failure')
    async def write_failure() -> None:
        raise WriteFailureError('Could not update slot')

    @app.get('/value-error')
    async def value_error() -> None:
        raise ValueError('bad hour')

    @app.post('/validated')
    async def validated(payload: _Payload) -> int:
        return payload.amount

    @app.get('/boom')
    async def boom() -> None:
        raise RuntimeError('unexpected')

    return TestClient(app, raise_server_exceptions=False)


class TestExceptionHandlers:
    def test_conflict_lists_slot_ids(self, client) -> None:
        response = client.get('/conflict')

        assert response.status_code == 409
        assert response.json() == {
            'detail': 'Some slots are already booked',
            'error': 'Conflict',
            'retryable': False,
            'conflicting_slot_ids': [3, 4],
        }

    def test_partial_inventory_lists_missing_ids(self, client) -> None:
        response = client.get('/partial')

        assert response.status_code == 404
        assert response.json()['error'] == 'PartialInventory'
        assert response.json()['missing_slot_ids'] == [9]

    def test_too_late_is_a_client_error(self, client) -> None:
        response = client.get('/too-late')

        assert response.status_code == 400
        assert response.json()['error'] == 'TooLate'

    def test_write_failure_is_retryable(self, client) -> None:
        response = client.get('/write-failure')

        assert response.status_code == 503
        assert response.json()['retryable'] is True

    @pytest.mark.parametrize(
        'method,path,body',
        [
            ('GET', '/value-error', None),
            ('POST', '/validated', {'amount': 'lots'}),
        ],
    )
    def test_bad_input_is_400(self, client, method, path, body) -> None:
        response = client.request(method, path, json=body)

        assert response.status_code == 400
        assert response.json()['error'] == 'InvalidInput'

    def test_unhandled_error_hides_details(self, client) -> None:
        response = client.get('/boom')

        assert response.status_code == 500
        assert response.json() == {'detail': 'Internal server error'}
