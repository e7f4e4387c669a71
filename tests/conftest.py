"""
Pytest configuration and shared fixtures.

This module provides common fixtures for testing:
- JWT authentication
- User and task stores on temporary files
- A fully wired services container
- API clients
"""

import os
import sys
import json
import tempfile
from pathlib import Path
from typing import Generator, Callable
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment variables before imports
os.environ["JWT_SECRET_KEY"] = "test_jwt_secret_key_for_testing_only_32bytes!"
os.environ["ENVIRONMENT"] = "test"

from taskdesk.config import Config
from taskdesk.auth import JWTHandler, UserStore, User, PasswordHandler, Identity
from taskdesk.tasks import TaskStore
from taskdesk.services import TaskService


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture(scope="session")
def test_config():
    """Test configuration values."""
    return {
        "jwt_secret": "test_jwt_secret_key_for_testing_only_32bytes!",
        "test_email": "jane@example.com",
        "test_password": "secret1",
        "test_user_name": "Jane Doe",
        # Lowest bcrypt cost, keeps the suite fast
        "bcrypt_rounds": 4,
    }


# =============================================================================
# JWT Fixtures
# =============================================================================

@pytest.fixture
def jwt_handler(test_config) -> JWTHandler:
    """Create a JWTHandler with test secret."""
    return JWTHandler(secret_key=test_config["jwt_secret"])


@pytest.fixture
def valid_access_token(jwt_handler) -> str:
    """Create a valid access token."""
    return jwt_handler.create_access_token(user_id="test-user-id-123")


@pytest.fixture
def expired_token(jwt_handler) -> str:
    """Create an expired access token."""
    return jwt_handler.create_access_token(
        user_id="test-user-id-123",
        expires_in=-1  # Already expired
    )


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def temp_user_file() -> Generator[Path, None, None]:
    """Create a temporary file for user storage."""
    with tempfile.NamedTemporaryFile(
        mode='w', suffix='.json', delete=False
    ) as f:
        json.dump({}, f)
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


@pytest.fixture
def temp_task_file() -> Generator[Path, None, None]:
    """Create a temporary file for task storage."""
    with tempfile.NamedTemporaryFile(
        mode='w', suffix='.json', delete=False
    ) as f:
        json.dump({}, f)
        temp_path = Path(f.name)

    yield temp_path

    if temp_path.exists():
        temp_path.unlink()


@pytest.fixture
def password_handler(test_config) -> PasswordHandler:
    """Create a PasswordHandler."""
    return PasswordHandler(rounds=test_config["bcrypt_rounds"])


@pytest.fixture
def user_store(temp_user_file, password_handler) -> UserStore:
    """Create a UserStore with temporary file."""
    return UserStore(file_path=temp_user_file, password_handler=password_handler)


@pytest.fixture
def sample_user(user_store, test_config) -> User:
    """Create a sample user in the store."""
    return user_store.create_user(
        name=test_config["test_user_name"],
        email=test_config["test_email"],
        password=test_config["test_password"]
    )


@pytest.fixture
def task_store(temp_task_file) -> TaskStore:
    """Create a TaskStore with temporary file."""
    return TaskStore(file_path=temp_task_file)


@pytest.fixture
def task_service(task_store) -> TaskService:
    return TaskService(task_store)


@pytest.fixture
def alice() -> Identity:
    return Identity(user_id="alice-id", name="Alice", email="alice@example.com")


@pytest.fixture
def bob() -> Identity:
    return Identity(user_id="bob-id", name="Bob", email="bob@example.com")


# =============================================================================
# Services / API Client Fixtures
# =============================================================================

@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create a temporary data directory."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def services(temp_data_dir, test_config):
    """Services container backed by a temporary data directory."""
    from api.deps import build_services

    config = Config()
    config.storage.data_dir = temp_data_dir
    config.auth.jwt_secret_key = test_config["jwt_secret"]
    config.auth.bcrypt_rounds = test_config["bcrypt_rounds"]
    return build_services(config)


@pytest.fixture
def api_app():
    """Create FastAPI app for testing."""
    from api.main import app
    return app


@pytest.fixture
def api_client(api_app, services) -> Generator[TestClient, None, None]:
    """Test client wired to the temporary services."""
    with patch("api.deps.get_services", return_value=services):
        yield TestClient(api_app)


@pytest.fixture
def register_user(api_client) -> Callable[..., dict]:
    """Register a user through the API and return the response data (includes token)."""
    def _register(name: str, email: str, password: str = "secret1") -> dict:
        response = api_client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password}
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _register


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "api: mark test as API endpoint test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
