from flask import request, current_app
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from skyway.api.admin import admin_bp
from skyway.extensions import db
from skyway.models import Flight, Location
from skyway.utils.decorators import admin_required
from skyway.utils.api_response import APIResponse
from skyway.utils.search_n_filters import SearchHelper
from skyway.api.admin.schemas import AdminSchemas

# ===== FLIGHT MANAGEMENT =====

def _check_locations(cleaned_data):
    for key in ('origin_id', 'destination_id'):
        if key in cleaned_data and not db.session.get(Location, cleaned_data[key]):
            return f"Location {cleaned_data[key]} not found"
    return None


@admin_bp.route('/flights', methods=['GET'])
@admin_required()
def get_flights():
    """Paginated flights, soonest departure first"""
    pagination = AdminSchemas.validate_pagination(request.args.to_dict())
    query = Flight.query.order_by(Flight.departure_time.asc())
    return APIResponse.paginated(
        'flights', SearchHelper.paginate_query(query, pagination['page'], pagination['per_page'])
    )


@admin_bp.route('/flights', methods=['POST'])
@admin_required()
def create_flight():
    is_valid, errors, cleaned_data = AdminSchemas.validate_flight(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)
    
    missing = _check_locations(cleaned_data)
    if missing:
        return APIResponse.not_found(missing)
    
    flight = Flight(**cleaned_data)
    try:
        db.session.add(flight)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Create flight error: {str(e)}")
        return APIResponse.server_error("Failed to create flight")
    
    return APIResponse.created({'flight': flight.to_dict()}, message='Flight created')


@admin_bp.route('/flights/<int:flight_id>', methods=['PUT'])
@admin_required()
def update_flight(flight_id):
    flight = db.session.get(Flight, flight_id)
    if not flight:
        return APIResponse.not_found("Flight not found")
    
    is_valid, errors, cleaned_data = AdminSchemas.validate_flight(
        request.get_json(silent=True), partial=True
    )
    if not is_valid:
        return APIResponse.validation_error(errors)
    
    missing = _check_locations(cleaned_data)
    if missing:
        return APIResponse.not_found(missing)
    
    for key, value in cleaned_data.items():
        setattr(flight, key, value)
    
    if flight.arrival_time <= flight.departure_time:
        db.session.rollback()
        return APIResponse.validation_error({'arrivalTime': 'Arrival must be after departure'})
    
    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Update flight error: {str(e)}")
        return APIResponse.server_error("Failed to update flight")
    
    return APIResponse.success({'flight': flight.to_dict()}, message='Flight updated')


@admin_bp.route('/flights/<int:flight_id>', methods=['DELETE'])
@admin_required()
def delete_flight(flight_id):
    flight = db.session.get(Flight, flight_id)
    if not flight:
        return APIResponse.not_found("Flight not found")
    
    if flight.bookings.count():
        return APIResponse.conflict("Cannot delete a flight that has bookings")
    
    try:
        db.session.delete(flight)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Delete flight error: {str(e)}")
        return APIResponse.server_error("Failed to delete flight")
    
    return APIResponse.success(message='Flight deleted')


# ===== LOCATION MANAGEMENT =====

@admin_bp.route('/locations', methods=['POST'])
@admin_required()
def create_location():
    is_valid, errors, cleaned_data = AdminSchemas.validate_location(request.get_json(silent=True))
    if not is_valid:
        return APIResponse.validation_error(errors)
    
    location = Location(**cleaned_data)
    try:
        db.session.add(location)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return APIResponse.conflict(f"Location code {cleaned_data['code']} already exists")
    
    return APIResponse.created({'location': location.to_dict()}, message='Location created')


@admin_bp.route('/locations/<int:location_id>', methods=['PUT'])
@admin_required()
def update_location(location_id):
    location = db.session.get(Location, location_id)
    if not location:
        return APIResponse.not_found("Location not found")
    
    is_valid, errors, cleaned_data = AdminSchemas.validate_location(
        request.get_json(silent=True), partial=True
    )
    if not is_valid:
        return APIResponse.validation_error(errors)
    
    for key, value in cleaned_data.items():
        setattr(location, key, value)
    
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return APIResponse.conflict(f"Location code {cleaned_data.get('code')} already exists")
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Update location error: {str(e)}")
        return APIResponse.server_error("Failed to update location")
    
    return APIResponse.success({'location': location.to_dict()}, message='Location updated')


@admin_bp.route('/locations/<int:location_id>', methods=['DELETE'])
@admin_required()
def delete_location(location_id):
    """Delete a location no flight departs from or flies to"""
    location = db.session.get(Location, location_id)
    if not location:
        return APIResponse.not_found("Location not found")
    
    in_use = Flight.query.filter(
        or_(Flight.origin_id == location_id, Flight.destination_id == location_id)
    ).count()
    if in_use:
        return APIResponse.conflict(f"Location {location.code} is used by {in_use} flight(s)")
    
    try:
        db.session.delete(location)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Delete location error: {str(e)}")
        return APIResponse.server_error("Failed to delete location")
    
    return APIResponse.success(message='Location deleted')
