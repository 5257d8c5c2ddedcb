from sqlalchemy import Column, Integer, String, Text
from core.database import Base


class Template(Base):
    __tablename__ = "templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=True)
    diagnosis = Column(Text, nullable=True)

    # JSON list of {name, dosage, duration, instruction}
    medicines = Column(Text, nullable=True)

    @property
    def medicine_list(self):
        from services.template_service import parse_medicines

        return parse_medicines(self.medicines)

    def __repr__(self):
        return f"<Template {self.name}>"
