"""Persistence implementations for warden_auth.

This package contains database-specific implementations of the
repository interfaces defined in warden_auth.repositories.

Usage:
    from warden_auth.persistence.sqlalchemy import (
        RefreshTokenRepositorySQLAlchemy,
        RefreshTokenModel,
        AuthBase,
    )
"""
