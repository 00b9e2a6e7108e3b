"""
Booking request validation
"""
import re
from typing import Dict, Any, Tuple

from skyway.models.enums import Bucket
from skyway.api.flights.schemas import FlightSchemas


class BookingSchemas:
    
    EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
    
    @staticmethod
    def validate_pagination(data: Dict[str, Any], default_per_page: int) -> Dict[str, int]:
        """Validate and clean pagination parameters"""
        page = 1
        per_page = default_per_page
        
        if 'page' in data:
            try:
                page = max(1, int(data['page']))
            except (ValueError, TypeError):
                pass
        
        if 'perPage' in data:
            try:
                per_page = min(100, max(1, int(data['perPage'])))
            except (ValueError, TypeError):
                pass
        
        return {'page': page, 'per_page': per_page}
    
    @staticmethod
    def validate_booking_filters(data: Dict[str, Any], default_per_page: int) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """
        Validate the bookings list query
        
        Returns:
            (is_valid, errors, cleaned_data)
        """
        errors = {}
        cleaned_data = BookingSchemas.validate_pagination(data, default_per_page)
        
        bucket = str(data.get('filter', Bucket.ALL.value)).strip().lower() or Bucket.ALL.value
        valid_buckets = [b.value for b in Bucket]
        if bucket not in valid_buckets:
            errors['filter'] = f'Filter must be one of: {", ".join(valid_buckets)}'
        else:
            cleaned_data['bucket'] = bucket
        
        cleaned_data['search'] = str(data.get('search', '')).strip()
        
        return len(errors) == 0, errors, cleaned_data
    
    @staticmethod
    def validate_booking_create(data: Dict[str, Any]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """Validate a new booking request"""
        errors = {}
        cleaned_data = {}
        data = data or {}
        
        try:
            cleaned_data['flight_id'] = int(data.get('flightId'))
        except (ValueError, TypeError):
            errors['flightId'] = 'A valid flightId is required'
        
        fields = (
            ('passengerFirstName', 'passenger_first_name'),
            ('passengerLastName', 'passenger_last_name'),
            ('passengerPhone', 'passenger_phone'),
        )
        for field, key in fields:
            value = str(data.get(field, '')).strip()
            if not value:
                errors[field] = f'{field} is required'
            else:
                cleaned_data[key] = value
        
        email = str(data.get('passengerEmail', '')).strip().lower()
        if not BookingSchemas.EMAIL_PATTERN.match(email):
            errors['passengerEmail'] = 'A valid passengerEmail is required'
        else:
            cleaned_data['passenger_email'] = email
        
        cleaned_data['travel_class'] = FlightSchemas.validate_travel_class(
            data.get('travelClass'), errors
        )
        
        return len(errors) == 0, errors, cleaned_data
