"""
Shared fixtures: in-memory SQLite database, a recording email sender and
small factories for the records most tests need.
"""
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobportal.main import app
from jobportal.core.auth_dependency import Caller, get_db
from jobportal.core.rate_limit import rate_limit_store
from jobportal.core.security import create_access_token, hash_password
from jobportal.db.base import Base
from jobportal.db.models.application import Application, ApplicationStatusHistory
from jobportal.db.models.company import Company
from jobportal.db.models.job import Job
from jobportal.db.models.profile import Profile
from jobportal.db.models.user import User
from jobportal.services.email_service import EmailOutcome, EmailSender, get_email_sender


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

TEST_PASSWORD = "Password123"
# Hashed once; bcrypt is deliberately slow
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


class RecordingMailer(EmailSender):
    """EmailSender that records messages instead of calling the provider."""

    def __init__(self, outcome: EmailOutcome = None, error: Exception = None):
        super().__init__(api_key="re_test")
        self.outcome = outcome
        self.error = error
        self.sent = []

    def send(self, message):
        if self.error is not None:
            raise self.error
        self.sent.append(message)
        return self.outcome or EmailOutcome.sent(f"email_{len(self.sent)}")


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def client(db, mailer):
    """TestClient wired to the test database and the recording mailer."""
    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: mailer
    rate_limit_store.clear()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def create_user(db, role="jobseeker", email=None, name="Test User", is_active=True, company_name=None):
    user = User(
        name=name,
        email=email or f"{role}{db.query(User).count() + 1}@example.com",
        password_hash=TEST_PASSWORD_HASH,
        role=role,
        company_name=company_name,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_company(db, owner, status="approved", name="Acme Corp"):
    company = Company(user_id=owner.id, name=name, email=owner.email, status=status)
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


def create_job(db, company, title="Backend Engineer", status="active", application_deadline=None):
    job = Job(
        company_id=company.id,
        company_name=company.name,
        title=title,
        job_type="Full-time",
        location="Remote",
        description="Build APIs",
        responsibilities=["Write code"],
        requirements=["Python"],
        status=status,
        application_deadline=application_deadline,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def create_profile(db, user, resume="uploads/resumes/cv.pdf"):
    profile = Profile(user_id=user.id, name=user.name, email=user.email, resume=resume, skills=["python"])
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def create_application(db, job, applicant, status="pending"):
    application = Application(
        job_id=job.id,
        user_id=applicant.id,
        name=applicant.name,
        email=applicant.email,
        resume="uploads/resumes/cv.pdf",
        status=status,
        notification_read=False,
    )
    db.add(application)
    db.commit()
    db.refresh(application)
    return application


def auth_headers(user):
    token = create_access_token({"sub": str(user.id), "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def world(db):
    """
    A small portal: one admin, two approved companies with one job each,
    a pending company, and a job seeker who applied to the first job.
    """
    admin = create_user(db, role="admin", email="admin@example.com", name="Site Admin")

    acme_owner = create_user(db, role="company", email="hr@acme.com", name="Acme HR", company_name="Acme Corp")
    acme = create_company(db, acme_owner, name="Acme Corp")
    acme_job = create_job(db, acme, title="Backend Engineer")

    globex_owner = create_user(db, role="company", email="hr@globex.com", name="Globex HR", company_name="Globex")
    globex = create_company(db, globex_owner, name="Globex")
    globex_job = create_job(db, globex, title="Data Analyst")

    pending_owner = create_user(db, role="company", email="hr@initech.com", name="Initech HR", company_name="Initech")
    pending_company = create_company(db, pending_owner, status="pending", name="Initech")

    seeker = create_user(db, role="jobseeker", email="jane@example.com", name="Jane Doe")
    create_profile(db, seeker)
    application = create_application(db, acme_job, seeker)

    other_seeker = create_user(db, role="jobseeker", email="sam@example.com", name="Sam Roe")
    create_profile(db, other_seeker)

    return SimpleNamespace(
        admin=admin,
        acme_owner=acme_owner,
        acme=acme,
        acme_job=acme_job,
        globex_owner=globex_owner,
        globex=globex,
        globex_job=globex_job,
        pending_owner=pending_owner,
        pending_company=pending_company,
        seeker=seeker,
        other_seeker=other_seeker,
        application=application,
    )


def caller_for(user):
    return Caller.from_user(user)


def history_for(db, application_id):
    return (
        db.query(ApplicationStatusHistory)
        .filter(ApplicationStatusHistory.application_id == application_id)
        .order_by(ApplicationStatusHistory.id)
        .all()
    )
