# models/prescription.py

from sqlalchemy import Column, Integer, String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from core.database import Base


class Prescription(Base):
    __tablename__ = "prescriptions"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Link to patient
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)

    diagnosis = Column(Text, nullable=True)

    # Local time of issue, never updated
    date = Column(String, nullable=True)

    # ORM relationships
    patient = relationship("Patient", back_populates="prescriptions")
    items = relationship(
        "PrescriptionItem",
        back_populates="prescription",
        order_by="PrescriptionItem.id",
    )

    def __repr__(self):
        return f"<Prescription {self.id} for Patient {self.patient_id}>"


class PrescriptionItem(Base):
    __tablename__ = "prescription_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    prescription_id = Column(Integer, ForeignKey("prescriptions.id"), nullable=False)

    # Free text copied from the form; not linked to inventory
    medicine = Column(String, nullable=False)
    dosage = Column(String, nullable=True)
    duration = Column(String, nullable=True)  # "5 Days" or a textual schedule
    instruction = Column(String, nullable=True)

    prescription = relationship("Prescription", back_populates="items")

    def __repr__(self):
        return f"<PrescriptionItem {self.medicine} ({self.dosage})>"


Index("idx_prescriptions_pid_date", Prescription.patient_id, Prescription.date)
