"""
Flight search validation
"""
from typing import Dict, Any, Tuple
from dateutil import parser

from skyway.models.enums import TravelClass


class FlightSchemas:
    
    @staticmethod
    def validate_travel_class(value, errors: Dict[str, str]):
        if not value:
            return TravelClass.ECONOMY.value
        valid_classes = [c.value for c in TravelClass]
        if value not in valid_classes:
            errors['travelClass'] = f'Travel class must be one of: {", ".join(valid_classes)}'
            return None
        return value
    
    @staticmethod
    def validate_search(data: Dict[str, Any]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """
        Validate flight search parameters
        
        Returns:
            (is_valid, errors, cleaned_data)
        """
        errors = {}
        cleaned_data = {}
        
        for field in ('origin', 'destination'):
            code = str(data.get(field, '')).strip().upper()
            if not code:
                errors[field] = f'{field} is required'
            else:
                cleaned_data[field] = code
        
        departure_date = str(data.get('departureDate', '')).strip()
        if not departure_date:
            errors['departureDate'] = 'departureDate is required'
        else:
            try:
                cleaned_data['departure_date'] = parser.parse(departure_date).date()
            except (ValueError, OverflowError):
                errors['departureDate'] = 'Invalid date format'
        
        cleaned_data['travel_class'] = FlightSchemas.validate_travel_class(
            data.get('travelClass'), errors
        )
        
        return len(errors) == 0, errors, cleaned_data
