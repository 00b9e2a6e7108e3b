"""
Admin API Validation Schemas
Handles request validation for all admin endpoints
"""
import re
from datetime import timezone
from decimal import Decimal, InvalidOperation
from typing import Dict, Any, Tuple, Optional
from dateutil import parser

from skyway.api.auth.schemas import AuthSchemas
from skyway.utils.booking import ADMIN_STATUSES


class AdminSchemas:
    """Validation schemas for admin API endpoints"""

    DATE_RANGES = ('all', 'today', 'thisWeek', 'thisMonth', 'custom')

    @staticmethod
    def validate_pagination(data: Dict[str, Any], default_per_page: int = 20) -> Dict[str, Any]:
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
    def _to_utc_naive(value):
        """Flight times are stored as naive UTC"""
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @staticmethod
    def _parse_date(value: Optional[str]):
        if not value:
            return None
        return parser.parse(value).date()

    # ===== Booking Management Schemas =====

    @staticmethod
    def validate_booking_filters(data: Dict[str, Any]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """Validate the admin bookings list query"""
        errors = {}
        cleaned_data = {
            'search': str(data.get('search', '')).strip(),
            'status': None,
            'origin_code': None,
            'destination_code': None,
        }

        status = str(data.get('status', '')).strip()
        if status and status != 'all':
            if status not in ADMIN_STATUSES:
                errors['status'] = f'Status must be one of: {", ".join(ADMIN_STATUSES)}'
            else:
                cleaned_data['status'] = status

        for field, key in (('originCode', 'origin_code'), ('destinationCode', 'destination_code')):
            code = str(data.get(field, '')).strip().upper()
            if code:
                cleaned_data[key] = code

        date_range = str(data.get('dateRange', 'all')).strip() or 'all'
        if date_range not in AdminSchemas.DATE_RANGES:
            errors['dateRange'] = f'Date range must be one of: {", ".join(AdminSchemas.DATE_RANGES)}'
        else:
            cleaned_data['date_range'] = date_range

        for field, key in (('startDate', 'start_date'), ('endDate', 'end_date')):
            try:
                cleaned_data[key] = AdminSchemas._parse_date(data.get(field))
            except (ValueError, OverflowError):
                errors[field] = 'Invalid date format'

        return len(errors) == 0, errors, cleaned_data

    @staticmethod
    def validate_status_update(data: Dict[str, Any]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """Validate a booking status change"""
        errors = {}
        cleaned_data = {}
        data = data or {}

        status = str(data.get('status', '')).strip()
        if status not in ADMIN_STATUSES:
            errors['status'] = f'Status must be one of: {", ".join(ADMIN_STATUSES)}'
        else:
            cleaned_data['status'] = status

        reason = data.get('declineReason')
        cleaned_data['decline_reason'] = str(reason).strip() if reason else None

        return len(errors) == 0, errors, cleaned_data

    # ===== Flight Management Schemas =====

    @staticmethod
    def validate_flight(data: Dict[str, Any], partial: bool = False) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """
        Validate flight create/update data

        With partial=True only the fields present are checked.
        """
        errors = {}
        cleaned_data = {}
        data = data or {}

        def present(field):
            return field in data or not partial

        for field, key in (('originId', 'origin_id'), ('destinationId', 'destination_id'), ('capacity', 'capacity')):
            if not present(field):
                continue
            try:
                value = int(data.get(field))
                if value < 1:
                    raise ValueError
                cleaned_data[key] = value
            except (ValueError, TypeError):
                errors[field] = f'{field} must be a positive integer'

        for field, key in (('departureTime', 'departure_time'), ('arrivalTime', 'arrival_time')):
            if not present(field):
                continue
            try:
                cleaned_data[key] = AdminSchemas._to_utc_naive(parser.parse(str(data.get(field))))
            except (ValueError, OverflowError):
                errors[field] = 'Invalid datetime format'

        prices = (
            ('economyPrice', 'economy_price'),
            ('businessPrice', 'business_price'),
            ('firstClassPrice', 'first_class_price'),
        )
        for field, key in prices:
            if not present(field):
                continue
            try:
                price = Decimal(str(data.get(field)))
                if price < 0 or not price.is_finite():
                    raise InvalidOperation
                cleaned_data[key] = price
            except (InvalidOperation, ValueError):
                errors[field] = f'{field} must be a non-negative amount'

        departure = cleaned_data.get('departure_time')
        arrival = cleaned_data.get('arrival_time')
        if departure and arrival and arrival <= departure:
            errors['arrivalTime'] = 'Arrival must be after departure'

        if cleaned_data.get('origin_id') and cleaned_data.get('origin_id') == cleaned_data.get('destination_id'):
            errors['destinationId'] = 'Origin and destination must differ'

        return len(errors) == 0, errors, cleaned_data

    @staticmethod
    def validate_location(data: Dict[str, Any], partial: bool = False) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        errors = {}
        cleaned_data = {}
        data = data or {}

        for field in ('code', 'name', 'city', 'country'):
            if partial and field not in data:
                continue
            value = str(data.get(field, '')).strip()
            if not value:
                errors[field] = f'{field} is required'
            else:
                cleaned_data[field] = value.upper() if field == 'code' else value

        return len(errors) == 0, errors, cleaned_data

    # ===== User Management Schemas =====

    @staticmethod
    def validate_user(data: Dict[str, Any], partial: bool = False) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """
        Validate an admin-managed account

        A password is required on creation; on update it is only
        changed when given.
        """
        errors = {}
        cleaned_data = {}
        data = data or {}

        for field, key in (('username', 'username'), ('firstName', 'first_name'), ('lastName', 'last_name')):
            if partial and field not in data:
                continue
            value = str(data.get(field) or '').strip()
            if not value:
                errors[field] = f'{field} is required'
            else:
                cleaned_data[key] = value

        if not partial or 'email' in data:
            email = str(data.get('email') or '').strip().lower()
            if not AuthSchemas.EMAIL_PATTERN.match(email):
                errors['email'] = 'Invalid email format'
            else:
                cleaned_data['email'] = email

        password = data.get('password')
        if password or not partial:
            if len(str(password or '')) < 6:
                errors['password'] = 'Password must be at least 6 characters'
            else:
                cleaned_data['password'] = str(password)

        if 'isAdmin' in data:
            if not isinstance(data['isAdmin'], bool):
                errors['isAdmin'] = 'isAdmin must be true or false'
            else:
                cleaned_data['is_admin'] = data['isAdmin']

        return len(errors) == 0, errors, cleaned_data

    # ===== Payment Settings Schemas =====

    @staticmethod
    def validate_payment_account(data: Dict[str, Any]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """Validate payout details and the tax / service fee rates"""
        errors = {}
        cleaned_data = {}
        data = data or {}

        if data.get('id') is not None:
            try:
                cleaned_data['id'] = int(data['id'])
            except (ValueError, TypeError):
                errors['id'] = 'Invalid account id'

        text_fields = (
            ('bankName', 'bank_name'),
            ('accountName', 'account_name'),
            ('accountNumber', 'account_number'),
            ('swiftCode', 'swift_code'),
            ('mobileProvider', 'mobile_provider'),
            ('mobileNumber', 'mobile_number'),
        )
        for field, key in text_fields:
            if field in data:
                cleaned_data[key] = str(data[field]).strip() if data[field] is not None else None

        for field, key in (('taxRate', 'tax_rate'), ('serviceFeeRate', 'service_fee_rate')):
            if field not in data:
                continue
            if data[field] is None:
                cleaned_data[key] = None
                continue
            try:
                rate = float(data[field])
                if not 0 <= rate < 1:
                    raise ValueError
                cleaned_data[key] = rate
            except (ValueError, TypeError):
                errors[field] = f'{field} must be a fraction between 0 and 1'

        return len(errors) == 0, errors, cleaned_data

    # ===== Site Content Schemas =====

    SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')

    @staticmethod
    def validate_page_content(data: Dict[str, Any], partial: bool = False) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        errors = {}
        cleaned_data = {}
        data = data or {}

        if not partial or 'slug' in data:
            slug = str(data.get('slug') or '').strip().lower()
            if not AdminSchemas.SLUG_PATTERN.match(slug):
                errors['slug'] = 'Slug must be lowercase letters, digits and dashes'
            else:
                cleaned_data['slug'] = slug

        for field in ('title', 'content'):
            if partial and field not in data:
                continue
            value = str(data.get(field) or '').strip()
            if not value:
                errors[field] = f'{field} is required'
            else:
                cleaned_data[field] = value

        return len(errors) == 0, errors, cleaned_data

    @staticmethod
    def validate_site_setting(data: Dict[str, Any]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        errors = {}
        cleaned_data = {}
        data = data or {}

        key = str(data.get('key') or '').strip()
        if not key:
            errors['key'] = 'key is required'
        else:
            cleaned_data['key'] = key

        if data.get('value') is None:
            errors['value'] = 'value is required'
        else:
            cleaned_data['value'] = str(data['value'])

        return len(errors) == 0, errors, cleaned_data
