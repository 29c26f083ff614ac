"""SQLAlchemy ORM model definitions."""

from sqlalchemy import (
    BigInteger,
    Column,
    Float,
    Integer,
    String,
    Text,
    Enum as SqlEnum,
)

from folio.repositories.sqlalchemy.database import Base
from folio.domain.models.enums import AssetType


class AssetORM(Base):
    """SQLAlchemy model for Asset."""

    __tablename__ = "assets"

    asset_id = Column(String(36), primary_key=True)
    position = Column(Integer, nullable=False, default=0)
    asset_type = Column(
        SqlEnum(AssetType, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    name = Column(String(255), nullable=False)
    symbol = Column(String(20), nullable=True)
    quantity = Column(Float, nullable=False, default=0.0)
    purchase_price = Column(Float, nullable=False, default=0.0)
    current_price = Column(Float, nullable=False, default=0.0)
    currency = Column(String(3), nullable=False, default="USD")
    added_at = Column(BigInteger, nullable=True)
    purchase_date = Column(String(10), nullable=True)

    address = Column(Text, nullable=True)
    monthly_income = Column(Float, nullable=True)
    monthly_rent = Column(Float, nullable=True)
    due_date = Column(String(10), nullable=True)
    estimated_value = Column(Float, nullable=True)
    interest_rate = Column(Float, nullable=True)

    plaid_account_id = Column(String(64), nullable=True)
    plaid_item_id = Column(String(64), nullable=True)
    snaptrade_account_id = Column(String(64), nullable=True)
    coinbase_account_id = Column(String(64), nullable=True)
