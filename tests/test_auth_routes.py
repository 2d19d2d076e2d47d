from extensions import mail
from app.models import User, UserRole

BASE = '/api/v1/auth'


def registration(**overrides):
    data = {
        'name': 'Jane Doe',
        'email': 'Jane@Example.com',
        'password': 'password123',
        'phonenumber': '0851234567',
        'dob': '1990-05-17',
    }
    data.update(overrides)
    return data


class TestRegister:

    def test_register_creates_user_and_sends_welcome(self, client):
        with mail.record_messages() as outbox:
            response = client.post(f'{BASE}/register', json=registration())

        assert response.status_code == 201
        body = response.get_json()
        assert body['access_token']
        assert body['user']['email'] == 'jane@example.com'
        assert body['user']['role'] == 'user'
        assert len(outbox) == 1
        assert outbox[0].recipients == ['jane@example.com']
        assert 'Welcome' in outbox[0].subject

    def test_role_cannot_be_chosen(self, client):
        client.post(f'{BASE}/register', json=registration(role='admin'))
        assert User.find_by_email('jane@example.com').role == UserRole.USER

    def test_duplicate_email(self, client, regular_user):
        response = client.post(f'{BASE}/register', json=registration(email='JANE@example.com'))
        assert response.status_code == 409

    def test_missing_field(self, client):
        response = client.post(f'{BASE}/register', json=registration(phonenumber=''))
        assert response.status_code == 400
        assert response.get_json()['field'] == 'phonenumber'

    def test_invalid_phone(self, client):
        response = client.post(f'{BASE}/register', json=registration(phonenumber='0821234567'))
        assert response.status_code == 400

    def test_short_password(self, client):
        response = client.post(f'{BASE}/register', json=registration(password='short'))
        assert response.status_code == 400

    def test_future_dob(self, client):
        response = client.post(f'{BASE}/register', json=registration(dob='2999-01-01'))
        assert response.status_code == 400


class TestLogin:

    def test_login_returns_token(self, client, regular_user):
        with mail.record_messages() as outbox:
            response = client.post(f'{BASE}/login', json={'email': 'jane@example.com', 'password': 'password123'})

        assert response.status_code == 200
        assert response.get_json()['access_token']
        assert [m.subject.split(' - ')[0] for m in outbox] == ['Login Notification']

    def test_bad_password(self, client, regular_user):
        response = client.post(f'{BASE}/login', json={'email': 'jane@example.com', 'password': 'wrong-password'})
        assert response.status_code == 401

    def test_missing_credentials(self, client):
        assert client.post(f'{BASE}/login', json={'email': 'jane@example.com'}).status_code == 400

    def test_token_identifies_user(self, client, regular_user, admin_user):
        token = client.post(
            f'{BASE}/login', json={'email': 'admin@example.com', 'password': 'password123'}
        ).get_json()['access_token']

        response = client.post('/api/v1/blocked-dates/', headers={'Authorization': f'Bearer {token}'},
                               json={'date': '2025-10-24', 'reason': 'Holiday'})

        assert response.status_code == 201

    def test_garbage_token_is_unauthorized(self, client):
        response = client.post('/api/v1/blocked-dates/', headers={'Authorization': 'Bearer not-a-token'},
                               json={'date': '2025-10-24', 'reason': 'Holiday'})
        assert response.status_code == 401


class TestUpdatePassword:

    def test_user_changes_own_password(self, client, regular_user, user_headers):
        with mail.record_messages() as outbox:
            response = client.put(f'{BASE}/update-password/{regular_user.id}', headers=user_headers, json={
                'currentPassword': 'password123', 'newPassword': 'new-password-1'
            })

        assert response.status_code == 200
        assert regular_user.check_password('new-password-1')
        assert len(outbox) == 1

    def test_wrong_current_password(self, client, regular_user, user_headers):
        response = client.put(f'{BASE}/update-password/{regular_user.id}', headers=user_headers, json={
            'currentPassword': 'nope', 'newPassword': 'new-password-1'
        })
        assert response.status_code == 401

    def test_cannot_change_someone_else(self, client, regular_user, user_factory, user_headers):
        other = user_factory()
        response = client.put(f'{BASE}/update-password/{other.id}', headers=user_headers, json={
            'currentPassword': 'password123', 'newPassword': 'new-password-1'
        })
        assert response.status_code == 403

    def test_admin_resets_without_current_password(self, client, regular_user, admin_headers):
        response = client.put(f'{BASE}/update-password/{regular_user.id}', headers=admin_headers, json={
            'newPassword': 'new-password-1'
        })

        assert response.status_code == 200
        assert regular_user.check_password('new-password-1')

    def test_requires_login(self, client, regular_user):
        response = client.put(f'{BASE}/update-password/{regular_user.id}', json={'newPassword': 'new-password-1'})
        assert response.status_code == 401
