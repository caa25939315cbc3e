"""
Tests for admin user management.
"""
import pytest

from jobportal.core.errors import AuthorizationError, NotFoundError, ValidationError
from jobportal.db.models.application import Application
from jobportal.db.models.user import User
from jobportal.services.user_service import delete_user, get_user, list_users, update_user

from conftest import auth_headers, caller_for, create_user


def test_list_users_by_role(db, world):
    admin = caller_for(world.admin)
    assert len(list_users(db, admin)) == 6
    assert {u.email for u in list_users(db, admin, role="jobseeker")} == {"jane@example.com", "sam@example.com"}


def test_non_admin_cannot_list_users(db, world):
    with pytest.raises(AuthorizationError):
        list_users(db, caller_for(world.acme_owner))


def test_admin_can_read_admin_user(db, world):
    assert get_user(db, caller_for(world.admin), world.admin.id).role == "admin"


def test_update_regular_user(db, world):
    user = update_user(db, caller_for(world.admin), world.seeker.id, {"name": "Jane Smith", "is_active": False})
    assert user.name == "Jane Smith"
    assert user.is_active is False


def test_cannot_promote_to_admin(db, world):
    with pytest.raises(ValidationError) as exc_info:
        update_user(db, caller_for(world.admin), world.seeker.id, {"role": "admin"})
    assert exc_info.value.message == "Cannot change user role to admin through this endpoint"
    db.expire_all()
    assert db.get(User, world.seeker.id).role == "jobseeker"


def test_admin_accounts_cannot_be_modified_or_deleted(db, world):
    second_admin = create_user(db, role="admin", email="root@example.com")

    with pytest.raises(AuthorizationError) as exc_info:
        update_user(db, caller_for(world.admin), second_admin.id, {"name": "Renamed"})
    assert exc_info.value.message == "Cannot modify admin users"

    with pytest.raises(AuthorizationError) as exc_info:
        delete_user(db, caller_for(world.admin), second_admin.id)
    assert exc_info.value.message == "Cannot delete admin users"


def test_email_must_stay_unique(db, world):
    with pytest.raises(ValidationError) as exc_info:
        update_user(db, caller_for(world.admin), world.seeker.id, {"email": "sam@example.com"})
    assert exc_info.value.message == "Email already registered"


def test_delete_user_removes_their_applications(db, world):
    delete_user(db, caller_for(world.admin), world.seeker.id)

    db.expire_all()
    assert db.get(User, world.seeker.id) is None
    assert db.query(Application).filter(Application.user_id == world.seeker.id).count() == 0


def test_unknown_user(db, world):
    with pytest.raises(NotFoundError):
        update_user(db, caller_for(world.admin), 9999, {"name": "Ghost"})


def test_admin_user_endpoints(client, world):
    headers = auth_headers(world.admin)

    listing = client.get("/admin/users", params={"role": "company"}, headers=headers)
    assert listing.status_code == 200
    assert len(listing.json()) == 3

    patched = client.patch(f"/admin/users/{world.seeker.id}", json={"companyName": None, "name": "Jane S"}, headers=headers)
    assert patched.status_code == 200
    assert patched.json()["user"]["name"] == "Jane S"

    forbidden = client.patch(f"/admin/users/{world.admin.id}", json={"name": "Me"}, headers=headers)
    assert forbidden.status_code == 403

    deleted = client.delete(f"/admin/users/{world.other_seeker.id}", headers=headers)
    assert deleted.status_code == 200


def test_admin_endpoints_refuse_other_roles(client, world):
    response = client.get("/admin/users", headers=auth_headers(world.seeker))
    assert response.status_code == 403
    assert response.json()["error"] == "authorization_error"
