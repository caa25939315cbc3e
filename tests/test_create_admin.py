"""
Tests for the create_admin maintenance script.
"""
import pytest

from scripts.create_admin import create_admin

from conftest import create_user


def test_creates_admin(db):
    user = create_admin(db, "Site Admin", "Admin@Example.com", "Password123")
    assert user.role == "admin"
    assert user.email == "admin@example.com"


def test_existing_user_needs_promote_flag(db):
    create_user(db, email="jane@example.com")

    assert create_admin(db, "Jane", "jane@example.com", "Password123") is None
    promoted = create_admin(db, "Jane", "jane@example.com", "Password123", promote=True)
    assert promoted.role == "admin"


def test_weak_password_refused(db):
    with pytest.raises(ValueError):
        create_admin(db, "Site Admin", "admin@example.com", "weak")
