from sqlalchemy import Column, String, DateTime
from app.core.database import Base

class User(Base):
    __tablename__ = "users"

    # Subject claim issued by the identity provider
    id = Column(String, primary_key=True, index=True)
    email = Column(String, nullable=True, index=True)
    display_name = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
