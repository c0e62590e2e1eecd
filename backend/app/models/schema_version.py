from sqlalchemy import Column, DateTime, Integer

from app.db import Base


class SchemaVersion(Base):
    __tablename__ = "schema_version"

    version = Column(Integer, primary_key=True, autoincrement=False)
    applied_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<SchemaVersion version={self.version}>"
