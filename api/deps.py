"""
API dependencies.

Provides dependency injection for services and request authentication.
"""

import logging
from typing import Optional, Annotated
from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from taskdesk.config import load_config, Config
from taskdesk.auth import JWTHandler, PasswordHandler, UserStore, AuthGateway, Identity
from taskdesk.tasks import TaskStore
from taskdesk.services import UserAuthService, ProfileService, TaskService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Container for all services."""
    config: Config
    jwt: JWTHandler
    users: UserStore
    task_store: TaskStore
    gateway: AuthGateway
    user_auth: UserAuthService
    profiles: ProfileService
    tasks: TaskService


def build_services(config: Config) -> Services:
    """Wire every store and service from a config."""
    jwt = JWTHandler(
        secret_key=config.auth.jwt_secret_key or None,
        expires_in=config.auth.token_expire_seconds
    )
    users = UserStore(
        file_path=config.storage.users_file,
        password_handler=PasswordHandler(rounds=config.auth.bcrypt_rounds)
    )
    task_store = TaskStore(file_path=config.storage.tasks_file)

    return Services(
        config=config,
        jwt=jwt,
        users=users,
        task_store=task_store,
        gateway=AuthGateway(jwt, users),
        user_auth=UserAuthService(jwt, users),
        profiles=ProfileService(users),
        tasks=TaskService(task_store)
    )


# Global services instance (singleton)
_services: Optional[Services] = None


def get_services() -> Services:
    """
    Get or create the services singleton.

    This initializes all services on first call.
    """
    global _services

    if _services is None:
        logger.info("Initializing services...")
        _services = build_services(load_config())
        logger.info(f"Services initialized (data dir: {_services.config.storage.data_dir})")

    return _services


def close_services():
    """Drop the services singleton."""
    global _services
    if _services:
        _services = None
        logger.info("Services closed")


# Dependency for getting services
def services_dep() -> Services:
    """FastAPI dependency for services."""
    return get_services()


ServicesDep = Annotated[Services, Depends(services_dep)]


# Authentication dependencies

# Security scheme
security = HTTPBearer(auto_error=False)


def get_current_identity(
    services: ServicesDep,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None
) -> Identity:
    """
    Authenticate the request from its bearer token.

    Raises the gateway's AuthenticationError subclasses, which the app's
    exception handlers turn into 401/403 responses.
    """
    return services.gateway.authenticate(credentials.credentials if credentials else None)


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
