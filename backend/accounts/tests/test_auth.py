import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

User = get_user_model()


@pytest.fixture
def client():
    return APIClient()


@pytest.fixture
def user(db):
    return User.objects.create_user(
        username="client@example.com",
        email="client@example.com",
        password="examplepass",
        first_name="Asha",
        last_name="Rao",
    )


def test_login_returns_tokens_and_user_payload(db, client, user):
    response = client.post(
        "/api/auth/login/",
        {"email": "Client@Example.com", "password": "examplepass"},
        format="json",
    )

    assert response.status_code == 200
    body = response.json()
    assert "access" in body and "refresh" in body
    assert body["user"]["email"] == "client@example.com"
    assert body["user"]["role"] == User.CLIENT


def test_login_with_wrong_password_is_rejected(db, client, user):
    response = client.post(
        "/api/auth/login/",
        {"email": "client@example.com", "password": "nope"},
        format="json",
    )

    assert response.status_code == 401


def test_bearer_token_reaches_me_endpoint(db, client, user):
    tokens = client.post(
        "/api/auth/login/",
        {"email": "client@example.com", "password": "examplepass"},
        format="json",
    ).json()

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
    response = client.get("/api/auth/me/")

    assert response.status_code == 200
    assert response.json()["first_name"] == "Asha"


def test_me_requires_authentication(db, client):
    assert client.get("/api/auth/me/").status_code == 401


def test_profile_update_cannot_change_role(db, client, user):
    client.force_authenticate(user)

    response = client.patch(
        "/api/auth/me/",
        {"phone_number": "+919822222222", "brand_name": "Blu Label", "role": "admin"},
        format="json",
    )

    assert response.status_code == 200
    user.refresh_from_db()
    assert user.phone_number == "+919822222222"
    assert user.brand_name == "Blu Label"
    assert user.role == User.CLIENT
