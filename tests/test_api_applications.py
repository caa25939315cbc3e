"""
End-to-end tests for the application endpoints.
"""
from jobportal.db.models.application import Application
from jobportal.db.models.notification import Notification

from conftest import auth_headers


def test_apply_then_company_reviews_then_applicant_reads(client, db, world, mailer):
    applied = client.post(
        "/applications",
        json={"jobId": world.acme_job.id, "coverLetter": "Please hire me"},
        headers=auth_headers(world.other_seeker),
    )
    assert applied.status_code == 201
    application = applied.json()["application"]
    assert application["status"] == "pending"
    assert application["coverLetter"] == "Please hire me"
    application_id = application["id"]

    reviewed = client.patch(
        f"/applications/{application_id}",
        json={"status": "shortlisted", "notes": "Great portfolio"},
        headers=auth_headers(world.acme_owner),
    )
    assert reviewed.status_code == 200
    body = reviewed.json()["application"]
    assert body["status"] == "shortlisted"
    assert body["notificationRead"] is False
    assert [entry["status"] for entry in body["statusHistory"]] == ["shortlisted"]
    assert body["job"]["title"] == "Backend Engineer"
    assert body["job"]["companyName"] == "Acme Corp"

    feed = client.get("/notifications", headers=auth_headers(world.other_seeker)).json()
    assert feed["unreadCount"] == 1
    assert feed["notifications"][0]["relatedId"] == application_id

    read = client.get(f"/applications/{application_id}", headers=auth_headers(world.other_seeker))
    assert read.status_code == 200
    assert read.json()["notificationRead"] is True

    assert mailer.sent[-1].subject == "Application Update: Congratulations! You've been shortlisted for Backend Engineer"


def test_applicant_patch_cannot_escalate(client, db, world):
    response = client.patch(
        f"/applications/{world.application.id}",
        json={"status": "hired", "role": "admin", "notificationRead": True},
        headers=auth_headers(world.seeker),
    )

    assert response.status_code == 200
    assert response.json()["application"]["status"] == "pending"
    assert db.query(Notification).count() == 0


def test_foreign_company_gets_403(client, world):
    response = client.patch(
        f"/applications/{world.application.id}",
        json={"status": "rejected"},
        headers=auth_headers(world.globex_owner),
    )
    assert response.status_code == 403
    assert response.json()["error"] == "authorization_error"


def test_other_applicant_cannot_read(client, world):
    response = client.get(f"/applications/{world.application.id}", headers=auth_headers(world.other_seeker))
    assert response.status_code == 403


def test_invalid_status_is_400(client, world):
    response = client.patch(
        f"/applications/{world.application.id}",
        json={"status": "promoted"},
        headers=auth_headers(world.acme_owner),
    )
    assert response.status_code == 400


def test_empty_patch_is_400(client, world):
    response = client.patch(f"/applications/{world.application.id}", json={}, headers=auth_headers(world.admin))
    assert response.status_code == 400
    assert response.json()["message"] == "Please provide data to update"


def test_anonymous_patch_is_401(client, db, world):
    response = client.patch(f"/applications/{world.application.id}", json={"status": "hired"})
    assert response.status_code == 401
    db.expire_all()
    assert db.get(Application, world.application.id).status == "pending"


def test_duplicate_submission_over_http(client, world):
    response = client.post(
        "/applications",
        json={"jobId": world.acme_job.id},
        headers=auth_headers(world.seeker),
    )
    assert response.status_code == 400
    assert response.json()["message"] == "You have already applied for this job"


def test_listing_depends_on_role(client, world):
    mine = client.get("/applications", headers=auth_headers(world.seeker))
    assert [a["id"] for a in mine.json()] == [world.application.id]

    acme = client.get("/applications", headers=auth_headers(world.acme_owner))
    assert [a["id"] for a in acme.json()] == [world.application.id]

    globex = client.get("/applications", headers=auth_headers(world.globex_owner))
    assert globex.json() == []


def test_company_applications_endpoint(client, world):
    own = client.get(
        "/company/applications",
        params={"jobId": world.acme_job.id, "status": "all"},
        headers=auth_headers(world.acme_owner),
    )
    assert own.status_code == 200
    assert len(own.json()) == 1

    foreign = client.get(
        "/company/applications",
        params={"jobId": world.globex_job.id},
        headers=auth_headers(world.acme_owner),
    )
    assert foreign.status_code == 403


def test_null_notes_clears_them(client, db, world):
    headers = auth_headers(world.admin)
    client.patch(f"/applications/{world.application.id}", json={"notes": "x"}, headers=headers)

    response = client.patch(f"/applications/{world.application.id}", json={"notes": None}, headers=headers)

    assert response.status_code == 200
    assert response.json()["application"]["notes"] is None
    db.expire_all()
    assert db.get(Application, world.application.id).notes is None


def test_company_status_change_with_null_notes(client, db, world):
    client.patch(
        f"/applications/{world.application.id}",
        json={"notes": "Call back Monday"},
        headers=auth_headers(world.admin),
    )

    response = client.patch(
        f"/applications/{world.application.id}",
        json={"status": "reviewed", "notes": None},
        headers=auth_headers(world.acme_owner),
    )

    assert response.status_code == 200
    body = response.json()["application"]
    assert body["status"] == "reviewed"
    assert body["notes"] is None
    assert body["statusHistory"][-1]["notes"] is None


def test_null_status_is_400(client, world):
    response = client.patch(
        f"/applications/{world.application.id}",
        json={"status": None},
        headers=auth_headers(world.acme_owner),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"
