"""
Booking HTTP API

Drives the real routes through TestClient. The container's clock is frozen, so
expiry and cancellation windows are controlled by moving the `clock` fixture.
"""

from datetime import timedelta

from fastapi.testclient import TestClient
import pytest
from uuid_utils.compat import uuid7

from test.shared.utils import DEFAULT_NOW, FrozenClock, auth_headers


OWNER = auth_headers(1)
STRANGER = auth_headers(2)
START = DEFAULT_NOW + timedelta(days=1)


@pytest.fixture
def showtime(client: TestClient) -> dict:
    screen = client.post(
        '/api/screen',
        json={'cinema_name': 'Riverside', 'name': 'Screen 1', 'num_rows': 2, 'num_cols': 5},
        headers=OWNER,
    )
    assert screen.status_code == 201
    response = client.post(
        '/api/showtime',
        json={
            'movie_title': 'The Long Night',
            'screen_id': screen.json()['id'],
            'start_time': START.isoformat(),
            'end_time': (START + timedelta(hours=2)).isoformat(),
            'price': '15.00',
        },
        headers=OWNER,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def seats(client: TestClient, showtime: dict) -> list[dict]:
    response = client.get(f'/api/showtime/{showtime["id"]}/seats')
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def booking(client: TestClient, showtime: dict) -> dict:
    response = client.post(f'/api/booking/showtime/{showtime["id"]}', headers=OWNER)
    assert response.status_code == 201
    return response.json()


def _hold(client: TestClient, booking: dict, seat: dict, headers=OWNER):
    return client.post(
        f'/api/booking/{booking["booking_id"]}/hold-seat',
        json={'seat_id': seat['seat_id'], 'showtime_id': booking['showtime_id']},
        headers=headers,
    )


class TestAuthentication:
    def test_missing_token(self, client: TestClient, showtime: dict):
        response = client.post(f'/api/booking/showtime/{showtime["id"]}')

        assert response.status_code == 401

    def test_garbage_token(self, client: TestClient, showtime: dict):
        response = client.post(
            f'/api/booking/showtime/{showtime["id"]}',
            headers={'Authorization': 'Bearer not-a-jwt'},
        )

        assert response.status_code == 401


class TestBookingFlow:
    def test_create_booking(self, booking: dict, showtime: dict):
        assert booking['showtime_id'] == showtime['id']
        assert booking['status'] == 'PENDING'
        assert booking['seat_count'] == 0
        assert booking['total_price'] == '0.00'

    def test_create_booking_for_unknown_showtime(self, client: TestClient):
        response = client.post(f'/api/booking/showtime/{uuid7()}', headers=OWNER)

        assert response.status_code == 404

    def test_hold_release_confirm(self, client: TestClient, booking: dict, seats: list[dict]):
        first, second = seats[0], seats[1]

        assert _hold(client, booking, first).json()['seat_count'] == 1
        held = _hold(client, booking, second)
        assert held.status_code == 200
        assert held.json()['total_price'] == '30.00'

        released = client.post(
            f'/api/booking/{booking["booking_id"]}/release-seat',
            json={'seat_id': second['seat_id'], 'showtime_id': booking['showtime_id']},
            headers=OWNER,
        )
        assert released.status_code == 200
        assert released.json()['seat_count'] == 1

        confirmed = client.post(f'/api/booking/{booking["booking_id"]}/confirm', headers=OWNER)
        assert confirmed.status_code == 200
        body = confirmed.json()
        assert body['status'] == 'CONFIRMED'
        assert body['movie_title'] == 'The Long Night'
        assert [seat['seat_number'] for seat in body['seats']] == ['A1']

        detail = client.get(f'/api/booking/{booking["booking_id"]}', headers=OWNER).json()
        assert detail['status'] == 'CONFIRMED'
        assert [seat['status'] for seat in detail['seats']] == ['BOOKED']

    def test_seat_taken_by_other_booking(
        self, client: TestClient, showtime: dict, booking: dict, seats: list[dict]
    ):
        other = client.post(f'/api/booking/showtime/{showtime["id"]}', headers=STRANGER).json()
        assert _hold(client, booking, seats[0]).status_code == 200

        response = _hold(client, other, seats[0], headers=STRANGER)

        assert response.status_code == 409

    def test_confirm_without_seats(self, client: TestClient, booking: dict):
        response = client.post(f'/api/booking/{booking["booking_id"]}/confirm', headers=OWNER)

        assert response.status_code == 400

    def test_hold_after_expiry(
        self, client: TestClient, booking: dict, seats: list[dict], clock: FrozenClock
    ):
        clock.advance(minutes=15)

        response = _hold(client, booking, seats[0])

        assert response.status_code == 400
        detail = client.get(f'/api/booking/{booking["booking_id"]}', headers=OWNER).json()
        assert detail['status'] == 'EXPIRED'

    def test_cancel_confirmed_booking(
        self, client: TestClient, booking: dict, seats: list[dict], showtime: dict
    ):
        _hold(client, booking, seats[0])
        client.post(f'/api/booking/{booking["booking_id"]}/confirm', headers=OWNER)

        response = client.post(f'/api/booking/{booking["booking_id"]}/cancel', headers=OWNER)

        assert response.status_code == 200
        assert response.json()['status'] == 'CANCELLED'
        stats = client.get(f'/api/showtime/{showtime["id"]}/seats/stats').json()
        assert stats['available'] == stats['total'] == 10

    def test_cancel_inside_cutoff(
        self, client: TestClient, booking: dict, seats: list[dict], clock: FrozenClock
    ):
        _hold(client, booking, seats[0])
        client.post(f'/api/booking/{booking["booking_id"]}/confirm', headers=OWNER)
        clock.set(START - timedelta(minutes=30))

        response = client.post(f'/api/booking/{booking["booking_id"]}/cancel', headers=OWNER)

        assert response.status_code == 400
        assert '60 minutes' in response.json()['detail']


class TestOwnership:
    @pytest.mark.parametrize('action', ['confirm', 'cancel'])
    def test_stranger_cannot_act_on_booking(self, client: TestClient, booking: dict, action: str):
        response = client.post(f'/api/booking/{booking["booking_id"]}/{action}', headers=STRANGER)

        assert response.status_code == 403

    def test_stranger_cannot_hold_for_booking(
        self, client: TestClient, booking: dict, seats: list[dict]
    ):
        assert _hold(client, booking, seats[0], headers=STRANGER).status_code == 403

    def test_stranger_cannot_read_booking(self, client: TestClient, booking: dict):
        response = client.get(f'/api/booking/{booking["booking_id"]}', headers=STRANGER)

        assert response.status_code == 403

    def test_unknown_booking(self, client: TestClient):
        response = client.post(f'/api/booking/{uuid7()}/confirm', headers=OWNER)

        assert response.status_code == 404


class TestMyBookings:
    def test_paging(self, client: TestClient, showtime: dict):
        for _ in range(3):
            client.post(f'/api/booking/showtime/{showtime["id"]}', headers=OWNER)
        client.post(f'/api/booking/showtime/{showtime["id"]}', headers=STRANGER)

        first_page = client.get('/api/booking/my_booking?page=0&size=2', headers=OWNER).json()
        second_page = client.get('/api/booking/my_booking?page=1&size=2', headers=OWNER).json()

        assert first_page['total'] == 3
        assert len(first_page['items']) == 2
        assert len(second_page['items']) == 1
        assert all(item['movie_title'] == 'The Long Night' for item in first_page['items'])

    @pytest.mark.parametrize('query', ['page=-1', 'size=0', 'size=101'])
    def test_invalid_paging(self, client: TestClient, query: str):
        response = client.get(f'/api/booking/my_booking?{query}', headers=OWNER)

        assert response.status_code == 400
