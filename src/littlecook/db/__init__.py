"""
My Little Cook - Database access.

Supabase client lifecycle plus the table operations used by the web layer.
"""

from littlecook.db.client import create_service_client, get_db

__all__ = [
    "create_service_client",
    "get_db",
]
