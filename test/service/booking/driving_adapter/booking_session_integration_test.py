"""
Integration tests for the booking wizard endpoints

Drives the full flow through FastAPI: start session, pick seats, contact
details, confirm. Store and session registry are fresh in-memory instances
per test (see the `client` fixture).
"""

from typing import Any, Callable, Optional

from fastapi.testclient import TestClient
import pytest

from cinema_booking.service.booking.app.session.booking_session_registry import (
    BookingSessionRegistry,
)
from cinema_booking.service.booking.domain.value_object.principal import Principal


SESSION_URL = '/api/booking/session'
SHOW = {'movie_id': 'movie_1', 'theatre_id': 'theatre_1', 'date': '2099-01-10', 'time': '18:45'}

AuthHeaders = Callable[[Principal], dict[str, str]]


def start_session(client: TestClient, headers: Optional[dict[str, str]] = None) -> dict[str, Any]:
    response = client.post(SESSION_URL, json=SHOW, headers=headers or {})
    assert response.status_code == 201, response.text
    return response.json()


def drive_to_confirmation(
    client: TestClient,
    session_id: str,
    headers: Optional[dict[str, str]] = None,
    seats: tuple[str, ...] = ('A1', 'D3'),
    contact: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    headers = headers or {}
    for seat_id in seats:
        response = client.post(f'{SESSION_URL}/{session_id}/seat/{seat_id}', headers=headers)
        assert response.status_code == 200, response.text
    assert client.post(f'{SESSION_URL}/{session_id}/advance', headers=headers).status_code == 200
    response = client.put(
        f'{SESSION_URL}/{session_id}/contact',
        json=contact or {'phone': '+1 555 123 4567'},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    response = client.post(f'{SESSION_URL}/{session_id}/advance', headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


@pytest.mark.integration
class TestBookingSessionFlow:
    def test_start_session_returns_seat_map(
        self, client: TestClient, principal: Principal, auth_headers: AuthHeaders
    ) -> None:
        # Act
        body = start_session(client, auth_headers(principal))

        # Assert
        assert body['step'] == 'seat_selection'
        assert body['movie_title'] == 'Inception'
        assert body['theatre_name'] == 'Grand Cinema'
        assert [row['row'] for row in body['seat_rows']] == list('ABCDEFGH')
        tiers = [row['tier'] for row in body['seat_rows']]
        assert tiers == ['VIP', 'PREMIUM', 'PREMIUM'] + ['STANDARD'] * 4 + ['ACCESSIBLE']
        assert sum(len(row['seats']) for row in body['seat_rows']) == 80
        assert {t['tier']: t['price'] for t in body['tiers']} == {
            'VIP': 250,
            'PREMIUM': 200,
            'STANDARD': 150,
            'ACCESSIBLE': 100,
        }
        assert body['contact'] == {'name': 'Ada Lovelace', 'email': 'ada@example.com', 'phone': ''}
        assert body['total_price'] == 0

    def test_full_booking_flow(
        self, client: TestClient, principal: Principal, auth_headers: AuthHeaders
    ) -> None:
        """Select A1 + D3, fill phone, confirm; booking shows up in history"""
        # Arrange
        headers = auth_headers(principal)
        session_id = start_session(client, headers)['session_id']

        # Act
        toggle = client.post(f'{SESSION_URL}/{session_id}/seat/a1', headers=headers).json()
        confirmation = drive_to_confirmation(client, session_id, headers, seats=('D3',))
        response = client.post(f'{SESSION_URL}/{session_id}/confirm', headers=headers)

        # Assert
        assert toggle == {
            'seat_id': 'A1',
            'action': 'add',
            'selected_seats': ['A1'],
            'total_price': 250,
        }
        assert confirmation['step'] == 'confirmation'
        assert confirmation['selected_seats'] == ['A1', 'D3']
        assert confirmation['total_price'] == 400
        assert response.status_code == 201, response.text
        body = response.json()
        assert body['total_price'] == 400
        assert body['seats'] == ['A1', 'D3']
        assert body['status'] == 'confirmed'

        history = client.get('/api/booking/my_booking', headers=headers).json()
        assert [b['id'] for b in history['upcoming']] == [body['booking_id']]
        assert history['upcoming'][0]['seat_types'] == ['VIP', 'STANDARD']
        assert history['past'] == []

        # Finished sessions are dropped
        assert client.get(f'{SESSION_URL}/{session_id}', headers=headers).status_code == 404

    def test_booked_seats_show_in_next_session(
        self, client: TestClient, principal: Principal, auth_headers: AuthHeaders
    ) -> None:
        headers = auth_headers(principal)
        session_id = start_session(client, headers)['session_id']
        drive_to_confirmation(client, session_id, headers)
        client.post(f'{SESSION_URL}/{session_id}/confirm', headers=headers)

        body = start_session(client, headers)

        seats = [seat for row in body['seat_rows'] for seat in row['seats']]
        booked = [seat['id'] for seat in seats if seat['booked']]
        assert sorted(booked) == ['A1', 'D3']
        toggle = client.post(f'{SESSION_URL}/{body["session_id"]}/seat/A1', headers=headers)
        assert toggle.json()['action'] is None

    def test_toggle_twice_clears_seat(
        self, client: TestClient, principal: Principal, auth_headers: AuthHeaders
    ) -> None:
        headers = auth_headers(principal)
        session_id = start_session(client, headers)['session_id']

        client.post(f'{SESSION_URL}/{session_id}/seat/B4', headers=headers)
        response = client.post(f'{SESSION_URL}/{session_id}/seat/B4', headers=headers)

        assert response.json()['action'] == 'remove'
        assert response.json()['selected_seats'] == []

    def test_back_keeps_selection(
        self, client: TestClient, principal: Principal, auth_headers: AuthHeaders
    ) -> None:
        headers = auth_headers(principal)
        session_id = start_session(client, headers)['session_id']
        drive_to_confirmation(client, session_id, headers)

        client.post(f'{SESSION_URL}/{session_id}/back', headers=headers)
        body = client.post(f'{SESSION_URL}/{session_id}/back', headers=headers).json()

        assert body['step'] == 'seat_selection'
        assert body['selected_seats'] == ['A1', 'D3']

    def test_abort_drops_session(
        self,
        client: TestClient,
        session_registry: BookingSessionRegistry,
        principal: Principal,
        auth_headers: AuthHeaders,
    ) -> None:
        headers = auth_headers(principal)
        session_id = start_session(client, headers)['session_id']

        response = client.delete(f'{SESSION_URL}/{session_id}', headers=headers)

        assert response.status_code == 204
        assert len(session_registry) == 0


@pytest.mark.integration
class TestBookingSessionGuards:
    def test_advance_without_seats_is_rejected(
        self, client: TestClient, principal: Principal, auth_headers: AuthHeaders
    ) -> None:
        # Arrange
        headers = auth_headers(principal)
        session_id = start_session(client, headers)['session_id']

        # Act
        response = client.post(f'{SESSION_URL}/{session_id}/advance', headers=headers)

        # Assert
        assert response.status_code == 400
        assert response.json() == {
            'detail': 'Please select at least one seat',
            'code': 'ValidationError',
        }
        session = client.get(f'{SESSION_URL}/{session_id}', headers=headers).json()
        assert session['step'] == 'seat_selection'
        assert session['last_error'] == 'Please select at least one seat'

    def test_invalid_contact_is_rejected(
        self, client: TestClient, principal: Principal, auth_headers: AuthHeaders
    ) -> None:
        headers = auth_headers(principal)
        session_id = start_session(client, headers)['session_id']
        client.post(f'{SESSION_URL}/{session_id}/seat/A1', headers=headers)
        client.post(f'{SESSION_URL}/{session_id}/advance', headers=headers)
        client.put(
            f'{SESSION_URL}/{session_id}/contact', json={'phone': 'nope'}, headers=headers
        )

        response = client.post(f'{SESSION_URL}/{session_id}/advance', headers=headers)

        assert response.status_code == 400
        assert response.json()['detail'] == 'Invalid contact details: phone'

    def test_anonymous_confirm_requires_sign_in(
        self, client: TestClient, principal: Principal, auth_headers: AuthHeaders
    ) -> None:
        # Arrange - anonymous user fills in everything
        session_id = start_session(client)['session_id']
        drive_to_confirmation(
            client,
            session_id,
            contact={'name': 'Ada', 'email': 'ada@example.com', 'phone': '5551234567'},
        )

        # Act
        anonymous = client.post(f'{SESSION_URL}/{session_id}/confirm')
        signed_in = client.post(
            f'{SESSION_URL}/{session_id}/confirm', headers=auth_headers(principal)
        )

        # Assert
        assert anonymous.status_code == 401
        assert anonymous.json()['code'] == 'AuthenticationRequiredError'
        assert signed_in.status_code == 201, signed_in.text

    def test_other_user_cannot_drive_session(
        self,
        client: TestClient,
        principal: Principal,
        other_principal: Principal,
        auth_headers: AuthHeaders,
    ) -> None:
        session_id = start_session(client, auth_headers(principal))['session_id']

        response = client.post(
            f'{SESSION_URL}/{session_id}/seat/A1', headers=auth_headers(other_principal)
        )

        assert response.status_code == 403

    def test_seat_taken_meanwhile_conflicts(
        self,
        client: TestClient,
        principal: Principal,
        other_principal: Principal,
        auth_headers: AuthHeaders,
    ) -> None:
        # Arrange - both users hold A1 in their own session
        first_headers = auth_headers(principal)
        second_headers = auth_headers(other_principal)
        first = start_session(client, first_headers)['session_id']
        second = start_session(client, second_headers)['session_id']
        drive_to_confirmation(client, first, first_headers, seats=('A1',))
        drive_to_confirmation(client, second, second_headers, seats=('A1', 'A2'))

        # Act
        won = client.post(f'{SESSION_URL}/{first}/confirm', headers=first_headers)
        lost = client.post(f'{SESSION_URL}/{second}/confirm', headers=second_headers)

        # Assert
        assert won.status_code == 201
        assert lost.status_code == 409
        assert lost.json()['seats'] == ['A1']
        assert lost.json()['code'] == 'SeatConflictError'
        session = client.get(f'{SESSION_URL}/{second}', headers=second_headers).json()
        assert session['step'] == 'confirmation'

    def test_unknown_movie_is_rejected(self, client: TestClient) -> None:
        response = client.post(SESSION_URL, json=SHOW | {'movie_id': 'movie_404'})

        assert response.status_code == 422
        assert response.json()['code'] == 'DataIntegrityError'

    def test_missing_field_is_a_bad_request(self, client: TestClient) -> None:
        response = client.post(SESSION_URL, json={'movie_id': 'movie_1'})

        assert response.status_code == 400
        assert response.json()['code'] == 'RequestValidationError'

    def test_invalid_token_is_rejected(self, client: TestClient) -> None:
        response = client.post(SESSION_URL, json=SHOW, headers={'Authorization': 'Bearer junk'})

        assert response.status_code == 401
        assert response.json()['detail'] == 'Invalid token'

    def test_unknown_session_is_not_found(self, client: TestClient) -> None:
        response = client.get(f'{SESSION_URL}/does-not-exist')

        assert response.status_code == 404
