from datetime import datetime, time
from flask import request, current_app

from skyway.extensions import db
from skyway.models import Flight, Location, PaymentAccount
from skyway.models.enums import TravelClass
from skyway.services.pricing import PricingCalculator, RateConfiguration
from skyway.api.flights.schemas import FlightSchemas
from skyway.utils.api_response import APIResponse

from skyway.api.flights import flights_bp


def current_rates():
    return RateConfiguration.from_account(PaymentAccount.current())


def priced_flight(flight, rates, travel_class):
    data = flight.to_dict()
    data['travelClass'] = travel_class
    data['price'] = PricingCalculator.price_flight(flight, rates, travel_class).to_dict()
    return data


@flights_bp.route('/search', methods=['GET'])
def search_flights():
    """
    Search flights for a route on a given day
    
    Query params:
        - origin, destination: location codes
        - departureDate: day of departure
        - travelClass: Economy (default), Business or First Class
    """
    is_valid, errors, cleaned_data = FlightSchemas.validate_search(request.args.to_dict())
    if not is_valid:
        return APIResponse.validation_error(errors)
    
    origin = Location.query.filter_by(code=cleaned_data['origin']).first()
    destination = Location.query.filter_by(code=cleaned_data['destination']).first()
    if not origin or not destination:
        return APIResponse.success({'flights': []}, message='No flights found')
    
    day = cleaned_data['departure_date']
    flights = Flight.query.filter(
        Flight.origin_id == origin.id,
        Flight.destination_id == destination.id,
        Flight.departure_time >= datetime.combine(day, time.min),
        Flight.departure_time <= datetime.combine(day, time.max)
    ).order_by(Flight.departure_time.asc()).all()
    
    rates = current_rates()
    travel_class = cleaned_data['travel_class']
    
    current_app.logger.info(
        f"Flight search {origin.code}->{destination.code} on {day}: {len(flights)} result(s)"
    )
    
    return APIResponse.success({
        'flights': [priced_flight(flight, rates, travel_class) for flight in flights]
    }, message='Flights retrieved successfully')


@flights_bp.route('/<int:flight_id>', methods=['GET'])
def get_flight(flight_id):
    """Flight details with the price of every travel class"""
    flight = db.session.get(Flight, flight_id)
    if not flight:
        return APIResponse.not_found('Flight not found')
    
    rates = current_rates()
    data = flight.to_dict()
    data['prices'] = {
        travel_class.value: PricingCalculator.price_flight(flight, rates, travel_class.value).to_dict()
        for travel_class in TravelClass
    }
    
    return APIResponse.success({'flight': data})
