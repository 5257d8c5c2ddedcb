from sqlalchemy import Column, Integer, String
from core.database import Base


class InventoryItem(Base):
    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Stored upper-case by every writer
    name = Column(String, unique=True, nullable=False)

    default_dosage = Column(String, nullable=True)
    default_duration = Column(String, nullable=True)
    default_instruction = Column(String, nullable=True)

    def __repr__(self):
        return f"<InventoryItem {self.name}>"
