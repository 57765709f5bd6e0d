from sqlalchemy import Column, String, DateTime, Float, BigInteger
from app.core.database import Base

class StockData(Base):
    __tablename__ = "stock_data"

    id = Column(String, primary_key=True, index=True)
    symbol = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    change = Column(Float, nullable=False)
    change_percent = Column(Float, nullable=False)
    volume = Column(BigInteger, nullable=False)
    market_cap = Column(Float, nullable=True)
    sector = Column(String, nullable=True)
    last_updated = Column(DateTime, nullable=False)
