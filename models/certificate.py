# models/certificate.py

from sqlalchemy import Column, Integer, String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from core.database import Base


class Certificate(Base):
    __tablename__ = "certificates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)

    diagnosis = Column(Text, nullable=True)

    # Rest period, ISO dates (YYYY-MM-DD)
    start_date = Column(String, nullable=True)
    end_date = Column(String, nullable=True)

    # Local time of issue
    created_at = Column(String, nullable=True)

    patient = relationship("Patient", back_populates="certificates")

    def __repr__(self):
        return f"<Certificate {self.id} for Patient {self.patient_id}>"


Index("idx_certificates_pid_date", Certificate.patient_id, Certificate.created_at)
