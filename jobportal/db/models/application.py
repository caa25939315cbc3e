"""
Job application model and its status history log.

History rows are only ever inserted; ordering is by insertion id so the log
reflects commit order at the storage layer.
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, backref
from jobportal.db.base import Base

APPLICATION_STATUSES = (
    "pending",
    "reviewed",
    "shortlisted",
    "interview",
    "hired",
    "rejected",
    "accepted",
)


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Applicant details, copied from the profile at submission
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    resume = Column(String, nullable=True)
    cv = Column(String, nullable=True)
    cover_letter = Column(Text, nullable=True)

    status = Column(String, nullable=False, default="pending", index=True)
    notes = Column(Text, nullable=True)  # employer notes
    notification_read = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    job = relationship("Job", backref=backref("applications", cascade="all, delete-orphan"))
    applicant = relationship("User", backref=backref("applications", cascade="all, delete-orphan"))
    status_history = relationship(
        "ApplicationStatusHistory",
        back_populates="application",
        order_by="ApplicationStatusHistory.id",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("job_id", "user_id", name="uq_application_job_user"),
    )

    def __repr__(self):
        return f"<Application(id={self.id}, job_id={self.job_id}, user_id={self.user_id}, status='{self.status}')>"


class ApplicationStatusHistory(Base):
    __tablename__ = "application_status_history"

    id = Column(Integer, primary_key=True, index=True)
    application_id = Column(Integer, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    notes = Column(Text, nullable=True)

    application = relationship("Application", back_populates="status_history")
