# stockpile_api/stores/stockpiles.py
import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockpile_api.database import DatabaseError
from stockpile_api.models.stockpile import Stockpile
from stockpile_api.models.users import User
from stockpile_api.schemas.stockpile import StockpileBase

logger = logging.getLogger(__name__)


def _to_dict(stockpile: Stockpile, responsible_name: Optional[str]) -> dict:
    return {
        "id": stockpile.id,
        "name": stockpile.name,
        "material": stockpile.material,
        "grade": stockpile.grade,
        "length": stockpile.length,
        "width": stockpile.width,
        "height": stockpile.height,
        "volume": stockpile.volume,
        "location": {
            "type": "Point",
            "coordinates": [stockpile.longitude, stockpile.latitude],
        },
        "responsible_team_id": stockpile.responsible_team_id,
        "responsible_name": responsible_name,
        "created_at": stockpile.created_at,
        "updated_at": stockpile.updated_at,
    }


def _columns(data: StockpileBase, responsible_team_id: int) -> dict:
    return {
        "name": data.name,
        "material": data.material,
        "grade": data.grade,
        "length": data.length,
        "width": data.width,
        "height": data.height,
        "volume": data.volume,
        "longitude": data.location.longitude,
        "latitude": data.location.latitude,
        "responsible_team_id": responsible_team_id,
    }


class StockpileStore:
    """Access to the ``stockpiles`` table.

    Reads are left-joined to ``users`` so every record carries the
    responsible user's name; an orphaned reference yields ``None``.
    Each mutation is a single statement in its own transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def _failed(self, action: str) -> DatabaseError:
        self.db.rollback()
        logger.exception("Database error while %s", action)
        return DatabaseError()

    def _joined(self):
        return self.db.query(Stockpile, User.name.label("responsible_name")).outerjoin(
            User, Stockpile.responsible_team_id == User.id
        )

    def find_all(self) -> List[dict]:
        try:
            rows = self._joined().order_by(Stockpile.created_at.desc(), Stockpile.id.desc()).all()
        except SQLAlchemyError as exc:
            raise self._failed("listing stockpiles") from exc
        return [_to_dict(stockpile, name) for stockpile, name in rows]

    def find_by_id(self, stockpile_id: int) -> Optional[dict]:
        try:
            row = self._joined().filter(Stockpile.id == stockpile_id).first()
        except SQLAlchemyError as exc:
            raise self._failed("fetching stockpile") from exc
        if row is None:
            return None
        return _to_dict(*row)

    def create(self, data: StockpileBase, responsible_team_id: int) -> dict:
        stockpile = Stockpile(**_columns(data, responsible_team_id))
        try:
            self.db.add(stockpile)
            self.db.commit()
            self.db.refresh(stockpile)
        except SQLAlchemyError as exc:
            raise self._failed("creating stockpile") from exc
        return self.find_by_id(stockpile.id)

    def update(self, stockpile_id: int, data: StockpileBase, responsible_team_id: int) -> Optional[dict]:
        values = _columns(data, responsible_team_id)
        values["updated_at"] = func.now()
        try:
            updated = (
                self.db.query(Stockpile)
                .filter(Stockpile.id == stockpile_id)
                .update(values, synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._failed("updating stockpile") from exc
        if not updated:
            return None
        return self.find_by_id(stockpile_id)

    def delete(self, stockpile_id: int) -> bool:
        try:
            deleted = (
                self.db.query(Stockpile)
                .filter(Stockpile.id == stockpile_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._failed("deleting stockpile") from exc
        return bool(deleted)

