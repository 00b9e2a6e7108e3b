"""
Tests for public flight and catalog endpoints
"""
from datetime import datetime


class TestFlightSearch:

    def test_search_by_route_and_day(self, client, make_flight):
        morning = make_flight('PAR', 'TYO', departure=datetime(2030, 3, 1, 8, 0))
        evening = make_flight('PAR', 'TYO', departure=datetime(2030, 3, 1, 21, 30))
        make_flight('PAR', 'TYO', departure=datetime(2030, 3, 2, 8, 0))
        make_flight('PAR', 'LON', departure=datetime(2030, 3, 1, 9, 0))

        response = client.get('/api/flights/search?origin=par&destination=TYO&departureDate=2030-03-01')

        assert response.status_code == 200
        flights = response.get_json()['data']['flights']
        assert [f['id'] for f in flights] == [morning.id, evening.id]
        assert flights[0]['travelClass'] == 'Economy'
        assert flights[0]['price']['totalPrice'] == 117.0

    def test_search_with_travel_class(self, client, make_flight):
        make_flight('PAR', 'TYO', departure=datetime(2030, 3, 1, 8, 0))

        response = client.get(
            '/api/flights/search?origin=PAR&destination=TYO&departureDate=2030-03-01&travelClass=First%20Class'
        )
        price = response.get_json()['data']['flights'][0]['price']
        assert price['basePrice'] == 500.0
        assert price['totalPrice'] == 585.0

    def test_search_unknown_location(self, client, locations):
        response = client.get('/api/flights/search?origin=XXX&destination=TYO&departureDate=2030-03-01')

        assert response.status_code == 200
        assert response.get_json()['data']['flights'] == []

    def test_search_validation(self, client):
        response = client.get('/api/flights/search?origin=PAR&departureDate=someday&travelClass=Coach')

        assert response.status_code == 422
        assert set(response.get_json()['errors']) == {'destination', 'departureDate', 'travelClass'}


class TestFlightDetails:

    def test_prices_for_every_class(self, client, make_flight):
        flight = make_flight(economy='80.00')

        response = client.get(f'/api/flights/{flight.id}')

        prices = response.get_json()['data']['flight']['prices']
        assert set(prices) == {'Economy', 'Business', 'First Class'}
        assert prices['Business']['totalPrice'] == 280.8

    def test_missing_flight(self, client):
        assert client.get('/api/flights/12345').status_code == 404


class TestCatalog:

    def test_locations_sorted_by_city(self, client, locations):
        response = client.get('/api/locations')
        cities = [loc['city'] for loc in response.get_json()['data']['locations']]
        assert cities == ['London', 'Paris', 'Tokyo']

    def test_payment_accounts_show_default_rates(self, client, db):
        from skyway.models import PaymentAccount

        db.session.add(PaymentAccount(bank_name='First Bank'))
        db.session.commit()

        accounts = client.get('/api/payment-accounts').get_json()['data']['accounts']
        assert accounts[0]['taxRate'] == 0.13
        assert accounts[0]['serviceFeeRate'] == 0.04
