from sqlalchemy import Column, Integer, String, Text, CheckConstraint
from sqlalchemy.orm import relationship
from jobly.core.database import Base
from jobly.models.job import Job


class Company(Base):
    """
    Company model. Identified by a unique, human-chosen handle.
    """
    __tablename__ = "companies"
    __table_args__ = (
        CheckConstraint("num_employees >= 0", name="ck_companies_num_employees"),
    )

    handle = Column(String(25), primary_key=True)
    name = Column(Text, nullable=False, index=True)
    description = Column(Text, nullable=False)
    num_employees = Column(Integer, nullable=True)
    logo_url = Column(Text, nullable=True)

    # Relationships
    jobs = relationship(
        Job,
        back_populates="company",
        cascade="all, delete-orphan",
        order_by=[Job.title, Job.id],
    )

    def __repr__(self):
        return f"<Company(handle='{self.handle}', name='{self.name}')>"
