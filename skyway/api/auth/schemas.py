"""
Authentication request validation
"""
import re
from typing import Dict, Any, Tuple, Optional


class AuthSchemas:
    """Validation schemas for auth endpoints"""
    
    EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
    
    @staticmethod
    def validate_login(data: Dict[str, Any]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """
        Validate user login data
        
        Returns:
            Tuple of (is_valid, errors, cleaned_data)
        """
        errors = {}
        cleaned_data = {}
        data = data or {}
        
        username = str(data.get('username', '')).strip()
        if not username:
            errors['username'] = 'Username is required'
        else:
            cleaned_data['username'] = username
        
        password = data.get('password', '')
        if not password:
            errors['password'] = 'Password is required'
        else:
            cleaned_data['password'] = password
        
        return len(errors) == 0, errors, cleaned_data
    
    @staticmethod
    def validate_registration(data: Dict[str, Any]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """Validate a new customer account"""
        errors = {}
        cleaned_data = {}
        data = data or {}
        
        for field, key in (('username', 'username'), ('firstName', 'first_name'), ('lastName', 'last_name')):
            value = str(data.get(field, '')).strip()
            if not value:
                errors[field] = f'{field} is required'
            else:
                cleaned_data[key] = value
        
        email = str(data.get('email', '')).strip().lower()
        if not email:
            errors['email'] = 'Email is required'
        elif not AuthSchemas.EMAIL_PATTERN.match(email):
            errors['email'] = 'Invalid email format'
        else:
            cleaned_data['email'] = email
        
        password = data.get('password', '')
        if len(password) < 6:
            errors['password'] = 'Password must be at least 6 characters'
        else:
            cleaned_data['password'] = password
        
        return len(errors) == 0, errors, cleaned_data
    
    @staticmethod
    def validate_profile_update(data: Dict[str, Any]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        """Only the fields present are checked and changed"""
        errors = {}
        cleaned_data = {}
        data = data or {}
        
        for field, key in (('firstName', 'first_name'), ('lastName', 'last_name')):
            if field not in data:
                continue
            value = str(data[field] or '').strip()
            if not value:
                errors[field] = f'{field} cannot be empty'
            else:
                cleaned_data[key] = value
        
        if 'email' in data:
            email = str(data['email'] or '').strip().lower()
            if not AuthSchemas.EMAIL_PATTERN.match(email):
                errors['email'] = 'Invalid email format'
            else:
                cleaned_data['email'] = email
        
        return len(errors) == 0, errors, cleaned_data
    
    @staticmethod
    def validate_password_change(data: Dict[str, Any]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
        errors = {}
        cleaned_data = {}
        data = data or {}
        
        current = str(data.get('currentPassword') or '')
        if not current:
            errors['currentPassword'] = 'Current password is required'
        else:
            cleaned_data['current_password'] = current
        
        new = str(data.get('newPassword') or '')
        if len(new) < 6:
            errors['newPassword'] = 'Password must be at least 6 characters'
        else:
            cleaned_data['new_password'] = new
        
        confirm = data.get('confirmPassword')
        if confirm is not None and confirm != new:
            errors['confirmPassword'] = 'Passwords do not match'
        
        return len(errors) == 0, errors, cleaned_data
