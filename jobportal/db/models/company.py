"""
Company profile model.

A company-role user owns exactly one profile. Only an approved profile may
post jobs or manage applications; status changes are admin-only.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, backref
from jobportal.db.base import Base

COMPANY_STATUSES = ("pending", "approved", "rejected")


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)

    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    logo = Column(String, nullable=True)
    website = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    location = Column(String, nullable=True)
    industry = Column(String, nullable=True)
    size = Column(String, nullable=True)
    founded_year = Column(Integer, nullable=True)

    # Moderation state, no rejection reason is stored here
    status = Column(String, nullable=False, default="pending", index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    owner = relationship("User", backref=backref("company", uselist=False, cascade="all, delete-orphan"))

    @property
    def is_approved(self) -> bool:
        return self.status == "approved"

    def __repr__(self):
        return f"<Company(id={self.id}, name='{self.name}', status='{self.status}')>"
