"""Tests for the Supabase client singleton."""

import pytest

from app import config
from app.infra.supabase import client as client_module
from app.infra.supabase import get_supabase_client, reset_supabase_client


@pytest.fixture(autouse=True)
def fresh_client():
    reset_supabase_client()
    yield
    reset_supabase_client()


@pytest.fixture
def created(monkeypatch):
    calls = []

    def fake_create_client(url, key):
        calls.append((url, key))
        return object()

    monkeypatch.setattr(config, "SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setattr(config, "SUPABASE_SERVICE_ROLE_KEY", "service-key")
    monkeypatch.setattr(client_module, "create_client", fake_create_client)
    return calls


def test_requires_configuration(monkeypatch):
    monkeypatch.setattr(config, "SUPABASE_URL", None)
    with pytest.raises(ValueError, match="SUPABASE_URL"):
        get_supabase_client()


def test_client_is_created_once(created):
    first = get_supabase_client()
    assert get_supabase_client() is first
    assert created == [("https://project.supabase.co", "service-key")]


def test_reset_builds_a_new_client(created):
    first = get_supabase_client()
    reset_supabase_client()
    assert get_supabase_client() is not first
    assert len(created) == 2
