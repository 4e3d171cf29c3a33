# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import os

# Settings are read on first import of core.config
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock, Mock
from typing import Generator

from main import create_app
from models.principal import AdminPrincipal, MemberPrincipal


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_admin():
    """Build an AdminPrincipal; keyword arguments override defaults."""
    def _make(**overrides):
        data = {
            "id": "admin-1",
            "name": "Ana Admin",
            "email": "ana@example.com",
            "access_code": "ADM-0001",
            "permission_level": "admin_supervisor",
            "is_active": True,
        }
        data.update(overrides)
        return AdminPrincipal(**data)
    return _make


@pytest.fixture
def make_member():
    """Build a MemberPrincipal; keyword arguments override defaults."""
    def _make(**overrides):
        data = {
            "id": "member-1",
            "name": "Bruno Membro",
            "member_code": "MB-0001",
            "group_id": "group-1",
            "role": "membro",
            "is_active": True,
        }
        data.update(overrides)
        return MemberPrincipal(**data)
    return _make


@pytest.fixture
def supabase_table():
    """
    Mock one Supabase table query chain.
    select/eq/limit/maybe_single all return the same query;
    execute() returns `data` or raises `error`.
    """
    def _make(data=None, error=None):
        query = MagicMock()
        for method in ("select", "eq", "limit", "maybe_single"):
            getattr(query, method).return_value = query
        if error is not None:
            query.execute.side_effect = error
        else:
            query.execute.return_value = Mock(data=data)
        return query
    return _make


@pytest.fixture
def mock_supabase_client():
    """Create a mock Supabase client routing table names to queries."""
    def _make(tables: dict):
        mock_client = Mock()
        mock_client.table.side_effect = lambda name: tables[name]
        return mock_client
    return _make
