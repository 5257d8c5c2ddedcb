# models/patient.py

from sqlalchemy import Column, Integer, String, Index
from sqlalchemy.orm import relationship
from core.database import Base


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Demographics
    name = Column(String, nullable=False)
    age = Column(Integer, nullable=True)  # as recorded at registration
    gender = Column(String, nullable=True)

    # Optional contact info, used by search
    phone = Column(String, nullable=True)

    # Local time "YYYY-MM-DD HH:MM:SS", set once at insert
    created_at = Column(String, nullable=True)

    # ORM relationships
    prescriptions = relationship("Prescription", back_populates="patient")
    certificates = relationship("Certificate", back_populates="patient")

    def __repr__(self):
        return f"<Patient {self.id} - {self.name}>"


Index("idx_patients_name", Patient.name.collate("NOCASE"))
Index("idx_patients_phone", Patient.phone)
