# Routes package


def register_blueprints(app):
    from skyway.api.main import main_bp
    from skyway.api.auth import auth_bp
    from skyway.api.flights import flights_bp
    from skyway.api.bookings import bookings_bp
    from skyway.api.notifications import notifications_bp
    from skyway.api.admin import admin_bp
    
    for blueprint in (main_bp, auth_bp, flights_bp, bookings_bp, notifications_bp, admin_bp):
        app.register_blueprint(blueprint)
