"""Fixtures for API tests: an app wired to an in-memory container."""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer
from tests.conftest import RecordingDispatcher, create_test_token


@pytest.fixture
def recording_dispatcher(container: ServiceContainer) -> RecordingDispatcher:
    """Replace the container's email dispatcher so tests can read tokens."""
    dispatcher = RecordingDispatcher()
    container._dispatcher = dispatcher
    return dispatcher


@pytest.fixture
def client(container: ServiceContainer) -> TestClient:
    return TestClient(create_app())


SIGNUP_FORM = {
    "full_name": "Jane Doe",
    "email": "jane@vit.ac.in",
    "password": "secret123",
    "confirm_password": "secret123",
}


@pytest.fixture
def signup(client, recording_dispatcher):
    """Sign up through the API and return the response body."""

    def _signup(**overrides) -> dict:
        response = client.post("/api/auth/signup", json={**SIGNUP_FORM, **overrides})
        assert response.status_code == 201, response.text
        return response.json()

    return _signup


@pytest.fixture
def verified_session(client, signup, recording_dispatcher) -> dict[str, str]:
    """Sign up, verify, and return bearer headers for the new account."""
    signup()
    response = client.post("/api/auth/verify-email", json={"token": recording_dispatcher.last_token})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['session_token']}"}


def bearer(user_id: str, email: str = "someone@vit.ac.in") -> dict[str, str]:
    return {"Authorization": f"Bearer {create_test_token(user_id=user_id, email=email)}"}
