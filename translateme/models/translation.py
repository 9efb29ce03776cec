from translateme.core.db import Base
from sqlalchemy import Column, Integer, DateTime, Text, func


class TranslationDocument(Base):
    __tablename__ = "translations"
    id = Column(Integer, primary_key=True)
    # Nullable: documents written by other clients may be incomplete and are skipped on read.
    original = Column(Text, nullable=True)
    translated = Column(Text, nullable=True)
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    # Load the server-assigned timestamp back on insert.
    __mapper_args__ = {"eager_defaults": True}
