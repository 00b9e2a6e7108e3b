"""
Tests for admin user management
"""
import pytest

from skyway.models import NotificationRecord, User
from skyway.services.notification import NotificationService


class TestListUsers:

    def test_lists_users(self, client, admin_headers, customer, make_user):
        make_user('bob')

        response = client.get('/api/admin/users', headers=admin_headers)

        assert response.status_code == 200
        data = response.get_json()['data']
        assert {u['username'] for u in data['users']} == {'admin', 'alice', 'bob'}
        assert data['pagination']['totalItems'] == 3
        assert all('password' not in key.lower() for key in data['users'][0])

    def test_search(self, client, admin_headers, customer, make_user):
        make_user('bob')

        response = client.get('/api/admin/users?search=ALI', headers=admin_headers)
        assert [u['username'] for u in response.get_json()['data']['users']] == ['alice']

    def test_customer_is_forbidden(self, client, auth_headers):
        assert client.get('/api/admin/users', headers=auth_headers).status_code == 403


class TestCreateUser:

    def payload(self, **overrides):
        data = {
            'username': 'carol',
            'email': 'Carol@Example.com',
            'firstName': 'Carol',
            'lastName': 'Jones',
            'password': 'secret99'
        }
        data.update(overrides)
        return data

    def test_create_user_hashes_password(self, client, admin_headers, db):
        response = client.post('/api/admin/users', json=self.payload(isAdmin=True), headers=admin_headers)

        assert response.status_code == 201
        user = User.query.filter_by(username='carol').first()
        assert user.email == 'carol@example.com'
        assert user.is_admin
        assert user.password_hash != 'secret99'
        assert user.check_password('secret99')

    def test_created_user_can_log_in(self, client, admin_headers):
        client.post('/api/admin/users', json=self.payload(), headers=admin_headers)

        response = client.post('/api/auth/login', json={'username': 'carol', 'password': 'secret99'})
        assert response.status_code == 200

    @pytest.mark.parametrize('field,value', [('username', 'alice'), ('email', 'ALICE@example.com')])
    def test_duplicate_is_rejected(self, client, admin_headers, customer, field, value):
        response = client.post('/api/admin/users', json=self.payload(**{field: value}), headers=admin_headers)

        assert response.status_code == 409
        assert response.get_json()['message'] == f'{field.capitalize()} already exists'

    def test_validation(self, client, admin_headers):
        response = client.post('/api/admin/users', json={'username': 'dave', 'email': 'nope'}, headers=admin_headers)

        assert response.status_code == 422
        assert set(response.get_json()['errors']) == {'email', 'password', 'firstName', 'lastName'}


class TestUpdateUser:

    def test_partial_update(self, client, admin_headers, customer, db):
        response = client.put(f'/api/admin/users/{customer.id}', json={'lastName': 'Smith'}, headers=admin_headers)

        assert response.status_code == 200
        db.session.expire_all()
        saved = db.session.get(User, customer.id)
        assert saved.last_name == 'Smith'
        assert saved.first_name == 'Alice'
        assert saved.check_password('password123')

    def test_password_is_rehashed(self, client, admin_headers, customer, db):
        client.put(f'/api/admin/users/{customer.id}', json={'password': 'brand-new'}, headers=admin_headers)

        db.session.expire_all()
        saved = db.session.get(User, customer.id)
        assert saved.check_password('brand-new')
        assert not saved.check_password('password123')

    def test_keeping_own_username_is_allowed(self, client, admin_headers, customer):
        response = client.put(f'/api/admin/users/{customer.id}', json={'username': 'alice'}, headers=admin_headers)
        assert response.status_code == 200

    def test_taken_email_conflicts(self, client, admin_headers, customer, make_user):
        bob = make_user('bob')

        response = client.put(f'/api/admin/users/{bob.id}', json={'email': customer.email}, headers=admin_headers)
        assert response.status_code == 409

    def test_short_password(self, client, admin_headers, customer):
        response = client.put(f'/api/admin/users/{customer.id}', json={'password': '123'}, headers=admin_headers)
        assert response.status_code == 422

    def test_unknown_user(self, client, admin_headers):
        assert client.put('/api/admin/users/999', json={}, headers=admin_headers).status_code == 404


class TestDeleteUser:

    def test_delete_user(self, client, admin_headers, make_user, db):
        bob = make_user('bob')
        bob_id = bob.id

        response = client.delete(f'/api/admin/users/{bob_id}', headers=admin_headers)

        assert response.status_code == 200
        assert db.session.get(User, bob_id) is None

    def test_cannot_delete_self(self, client, admin_headers, admin_user, db):
        response = client.delete(f'/api/admin/users/{admin_user.id}', headers=admin_headers)

        assert response.status_code == 400
        assert db.session.get(User, admin_user.id) is not None

    def test_user_with_bookings_conflicts(self, client, admin_headers, customer, make_flight, make_booking):
        make_booking(customer, make_flight())

        response = client.delete(f'/api/admin/users/{customer.id}', headers=admin_headers)
        assert response.status_code == 409

    def test_stored_notifications_are_removed(self, client, admin_headers, make_user):
        bob = make_user('bob')
        bob_id = bob.id
        NotificationService.save_inbox(bob_id, NotificationService.load_inbox(bob_id).add('Welcome', 'Hello Bob'))

        client.delete(f'/api/admin/users/{bob_id}', headers=admin_headers)

        assert NotificationRecord.query.filter_by(user_id=bob_id).count() == 0

    def test_unknown_user(self, client, admin_headers):
        assert client.delete('/api/admin/users/999', headers=admin_headers).status_code == 404
