from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from app.core.database import Base

class WatchlistItem(Base):
    __tablename__ = "watchlist_items"
    __table_args__ = (
        UniqueConstraint("user_id", "symbol", name="uq_watchlist_user_symbol"),
    )

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    symbol = Column(String, index=True, nullable=False)
    # Copied from the quote when added, not kept in sync afterwards
    name = Column(String, nullable=False)
    sector = Column(String, nullable=True)
    added_at = Column(DateTime, nullable=False)
