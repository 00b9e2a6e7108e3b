from flask import jsonify


class APIResponse:
    """JSON envelope shared by every endpoint: success, message, data, errors"""

    @staticmethod
    def _send(success, message, status_code, data=None, errors=None):
        body = {'success': success, 'message': message}
        if data is not None:
            body['data'] = data
        if errors:
            body['errors'] = errors
        return jsonify(body), status_code

    @staticmethod
    def success(data=None, message=None, status_code=200):
        return APIResponse._send(True, message or 'Operation successful', status_code, data=data)

    @staticmethod
    def created(data=None, message=None):
        return APIResponse.success(data, message or 'Created successfully', status_code=201)

    @staticmethod
    def paginated(key, page_data, message=None):
        """Wrap a {'items', 'pagination'} dict as {key: items, 'pagination': ...}"""
        return APIResponse.success(
            {key: page_data['items'], 'pagination': page_data['pagination']},
            message=message
        )

    @staticmethod
    def error(message, errors=None, status_code=400):
        return APIResponse._send(False, message, status_code, errors=errors)

    @staticmethod
    def validation_error(errors, message="Validation failed"):
        return APIResponse.error(message, errors=errors, status_code=422)

    @staticmethod
    def unauthorized(message="Authentication required"):
        return APIResponse.error(message, status_code=401)

    @staticmethod
    def forbidden(message="Forbidden"):
        return APIResponse.error(message, status_code=403)

    @staticmethod
    def not_found(message="Resource not found"):
        return APIResponse.error(message, status_code=404)

    @staticmethod
    def conflict(message):
        return APIResponse.error(message, status_code=409)

    @staticmethod
    def server_error(message="An unexpected error occurred"):
        return APIResponse.error(message, status_code=500)
