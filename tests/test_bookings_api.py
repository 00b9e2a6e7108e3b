"""
Tests for customer booking endpoints
"""
import pytest
from datetime import datetime, timedelta, timezone

from skyway.models import Booking


def utc_now():
    return datetime.now(timezone.utc).replace(tzinfo=None)


@pytest.fixture
def itinerary(customer, make_flight, make_booking):
    """Bookings spread across every list bucket"""
    future = make_flight('PAR', 'TYO', departure=utc_now() + timedelta(days=7))
    past = make_flight('LON', 'PAR', departure=utc_now() - timedelta(days=7))

    now = datetime.now(timezone.utc)
    return {
        'confirmed': make_booking(customer, future, 'Confirmed', booking_date=now - timedelta(hours=1)),
        'awaiting': make_booking(customer, future, 'Pending Payment', booking_date=now - timedelta(hours=2)),
        'flown': make_booking(customer, past, 'Completed', booking_date=now - timedelta(hours=3)),
        'declined': make_booking(customer, future, 'Declined', booking_date=now - timedelta(hours=4)),
    }


class TestListBookings:

    def test_requires_token(self, client):
        assert client.get('/api/bookings').status_code == 401

    def test_lists_only_own_bookings_newest_first(self, client, auth_headers, itinerary,
                                                  make_user, make_flight, make_booking):
        make_booking(make_user('bob'), make_flight(), 'Confirmed')

        response = client.get('/api/bookings', headers=auth_headers)

        assert response.status_code == 200
        data = response.get_json()['data']
        assert [b['id'] for b in data['bookings']] == [
            itinerary[key].id for key in ('confirmed', 'awaiting', 'flown', 'declined')
        ]
        assert data['pagination']['totalItems'] == 4

    @pytest.mark.parametrize('bucket,expected', [
        ('upcoming', ['confirmed', 'awaiting']),
        ('past', ['flown']),
        ('pending', ['awaiting']),
        ('confirmed', ['confirmed']),
        ('all', ['confirmed', 'awaiting', 'flown', 'declined']),
    ])
    def test_bucket_filter(self, client, auth_headers, itinerary, bucket, expected):
        response = client.get(f'/api/bookings?filter={bucket}', headers=auth_headers)

        ids = [b['id'] for b in response.get_json()['data']['bookings']]
        assert ids == [itinerary[key].id for key in expected]

    def test_search_by_reference(self, client, auth_headers, itinerary):
        booking_id = itinerary['flown'].id
        response = client.get(f'/api/bookings?search=%23bk-{booking_id}', headers=auth_headers)

        assert [b['id'] for b in response.get_json()['data']['bookings']] == [booking_id]

    def test_search_by_city(self, client, auth_headers, itinerary):
        response = client.get('/api/bookings?search=london', headers=auth_headers)
        assert [b['id'] for b in response.get_json()['data']['bookings']] == [itinerary['flown'].id]

    def test_invalid_filter(self, client, auth_headers):
        response = client.get('/api/bookings?filter=cancelled', headers=auth_headers)

        assert response.status_code == 422
        assert 'filter' in response.get_json()['errors']

    def test_pagination(self, client, auth_headers, customer, make_flight, make_booking):
        flight = make_flight()
        for _ in range(7):
            make_booking(customer, flight, 'Confirmed')

        first = client.get('/api/bookings', headers=auth_headers).get_json()['data']
        second = client.get('/api/bookings?page=2', headers=auth_headers).get_json()['data']
        beyond = client.get('/api/bookings?page=3', headers=auth_headers).get_json()['data']

        assert len(first['bookings']) == 5
        assert first['pagination']['totalPages'] == 2
        assert first['pagination']['hasNext'] is True
        assert len(second['bookings']) == 2
        assert second['pagination']['hasNext'] is False
        assert beyond['bookings'] == []

    def test_serialized_fields(self, client, auth_headers, itinerary):
        response = client.get('/api/bookings?filter=confirmed', headers=auth_headers)
        booking = response.get_json()['data']['bookings'][0]

        assert booking['reference'] == f"#BK-{itinerary['confirmed'].id}"
        assert booking['badgeColor'] == 'green'
        assert booking['buckets'] == ['confirmed', 'upcoming']
        assert booking['price'] == {
            'basePrice': 100.0,
            'taxAmount': 13.0,
            'serviceFeeAmount': 4.0,
            'totalPrice': 117.0
        }


class TestCreateAndPay:

    def payload(self, flight, **overrides):
        data = {
            'flightId': flight.id,
            'passengerFirstName': 'Alice',
            'passengerLastName': 'Tester',
            'passengerEmail': 'alice@example.com',
            'passengerPhone': '+15550100',
            'travelClass': 'Business'
        }
        data.update(overrides)
        return data

    def test_create_booking(self, client, auth_headers, customer, make_flight):
        flight = make_flight()
        response = client.post('/api/bookings', json=self.payload(flight), headers=auth_headers)

        assert response.status_code == 201
        booking = response.get_json()['data']['booking']
        assert booking['status'] == 'Pending'
        assert booking['userId'] == customer.id
        assert booking['travelClass'] == 'Business'
        assert booking['price']['basePrice'] == 300.0
        assert booking['badgeColor'] == 'yellow'

    def test_create_booking_unknown_flight(self, client, auth_headers, locations):
        response = client.post('/api/bookings', json={
            'flightId': 999,
            'passengerFirstName': 'Alice',
            'passengerLastName': 'Tester',
            'passengerEmail': 'alice@example.com',
            'passengerPhone': '+15550100'
        }, headers=auth_headers)

        assert response.status_code == 404

    def test_create_booking_validation(self, client, auth_headers, make_flight):
        flight = make_flight()
        response = client.post(
            '/api/bookings',
            json=self.payload(flight, passengerEmail='nope', travelClass='Premium'),
            headers=auth_headers
        )

        assert response.status_code == 422
        assert set(response.get_json()['errors']) == {'passengerEmail', 'travelClass'}

    def test_payment_moves_pending_to_pending_payment(self, client, auth_headers, customer,
                                                      make_flight, make_booking, db):
        booking = make_booking(customer, make_flight(), 'Pending')

        response = client.post(f'/api/bookings/{booking.id}/payment', headers=auth_headers)

        assert response.status_code == 200
        data = response.get_json()['data']['booking']
        assert data['status'] == 'Pending Payment'
        assert data['paymentReference'].startswith('TX-')

        db.session.expire_all()
        assert db.session.get(Booking, booking.id).status == 'Pending Payment'

    def test_payment_keeps_supplied_reference(self, client, auth_headers, customer, make_flight, make_booking):
        booking = make_booking(customer, make_flight(), 'Pending')

        response = client.post(
            f'/api/bookings/{booking.id}/payment',
            json={'paymentReference': 'MPESA-12345'},
            headers=auth_headers
        )
        assert response.get_json()['data']['booking']['paymentReference'] == 'MPESA-12345'

    def test_payment_on_other_users_booking(self, client, auth_headers, make_user, make_flight, make_booking):
        booking = make_booking(make_user('bob'), make_flight(), 'Pending')

        response = client.post(f'/api/bookings/{booking.id}/payment', headers=auth_headers)
        assert response.status_code == 403


class TestBookingDetails:

    def test_owner_can_view(self, client, auth_headers, customer, make_flight, make_booking):
        booking = make_booking(customer, make_flight(), 'Confirmed')

        response = client.get(f'/api/bookings/{booking.id}', headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json()['data']['booking']['id'] == booking.id

    def test_other_customer_is_forbidden(self, client, auth_headers, make_user, make_flight, make_booking):
        booking = make_booking(make_user('bob'), make_flight(), 'Confirmed')
        assert client.get(f'/api/bookings/{booking.id}', headers=auth_headers).status_code == 403

    def test_admin_can_view_any_booking(self, client, admin_headers, make_user, make_flight, make_booking):
        booking = make_booking(make_user('bob'), make_flight(), 'Confirmed')
        assert client.get(f'/api/bookings/{booking.id}', headers=admin_headers).status_code == 200

    def test_missing_booking(self, client, auth_headers):
        assert client.get('/api/bookings/404', headers=auth_headers).status_code == 404
