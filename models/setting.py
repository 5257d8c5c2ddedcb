from sqlalchemy import Column, String, Text
from core.database import Base


class Setting(Base):
    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Setting {self.key}={self.value!r}>"
