"""SQLAlchemy implementation of AssetRepository."""

from dataclasses import asdict

from sqlalchemy.orm import Session

from folio.domain.models import Asset
from folio.repositories.sqlalchemy.orm_models import AssetORM


class SqlAlchemyAssetRepository:
    """SQLAlchemy-backed asset repository."""

    def __init__(self, db: Session):
        self._db = db

    def load_assets(self) -> list[Asset]:
        """Load all assets in their stored order."""
        orm_assets = self._db.query(AssetORM).order_by(AssetORM.position).all()
        return [self._to_domain(a) for a in orm_assets]

    def save_assets(self, assets: list[Asset]) -> None:
        """Replace every stored asset in one transaction."""
        try:
            self._db.query(AssetORM).delete()
            for position, asset in enumerate(assets):
                self._db.add(self._to_orm(asset, position))
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise

    @staticmethod
    def _to_orm(asset: Asset, position: int) -> AssetORM:
        """Convert domain model to ORM model."""
        return AssetORM(position=position, **asdict(asset))

    @staticmethod
    def _to_domain(orm: AssetORM) -> Asset:
        """Convert ORM model to domain model."""
        return Asset(
            asset_id=orm.asset_id,
            asset_type=orm.asset_type,
            name=orm.name,
            symbol=orm.symbol,
            quantity=orm.quantity,
            purchase_price=orm.purchase_price,
            current_price=orm.current_price,
            currency=orm.currency,
            added_at=orm.added_at,
            purchase_date=orm.purchase_date,
            address=orm.address,
            monthly_income=orm.monthly_income,
            monthly_rent=orm.monthly_rent,
            due_date=orm.due_date,
            estimated_value=orm.estimated_value,
            interest_rate=orm.interest_rate,
            plaid_account_id=orm.plaid_account_id,
            plaid_item_id=orm.plaid_item_id,
            snaptrade_account_id=orm.snaptrade_account_id,
            coinbase_account_id=orm.coinbase_account_id,
        )
