"""
Job posting model.

``company_name`` is copied from the Company when the job is written and is
not re-synced if the company is renamed later.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, backref
from jobportal.db.base import Base

JOB_STATUSES = ("pending", "active", "closed")
JOB_TYPES = ("Full-time", "Part-time", "Contract", "Remote")


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    company_name = Column(String, nullable=False)

    title = Column(String, nullable=False, index=True)
    job_type = Column(String, nullable=False, default="Full-time")
    location = Column(String, nullable=True)
    salary = Column(String, nullable=True)  # free-form range, e.g. "$80k - $100k"
    description = Column(Text, nullable=True)
    responsibilities = Column(JSON, nullable=False, default=list)
    requirements = Column(JSON, nullable=False, default=list)
    apply_method = Column(JSON, nullable=True)  # {"type": "internal"|"email"|"link", "email": ..., "applyLink": ...}
    application_deadline = Column(DateTime(timezone=True), nullable=True)

    status = Column(String, nullable=False, default="active", index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    company = relationship("Company", backref=backref("jobs", cascade="all, delete-orphan"))

    __table_args__ = (
        Index("idx_company_status", "company_id", "status"),
    )

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', status='{self.status}')>"
