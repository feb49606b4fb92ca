"""Supabase client singleton"""
from typing import Optional

from supabase import Client, create_client  # type: ignore

from app import config

_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create Supabase client singleton"""
    global _supabase_client

    if _supabase_client is None:
        url = config.SUPABASE_URL
        key = config.SUPABASE_SERVICE_ROLE_KEY

        if not url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

        _supabase_client = create_client(url, key)

    return _supabase_client


def reset_supabase_client() -> None:
    """Drop the singleton so the next call builds a client from current config"""
    global _supabase_client
    _supabase_client = None
