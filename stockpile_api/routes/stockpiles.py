# stockpile_api/routes/stockpiles.py
import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from stockpile_api.database import DatabaseError, get_db
from stockpile_api.models.users import Role, User
from stockpile_api.schemas import stockpile as stockpile_schemas
from stockpile_api.schemas.user import MessageResponse
from stockpile_api.stores.stockpiles import StockpileStore
from stockpile_api.utils.tokenJWT import get_current_user, require_roles

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Stockpiles"])

can_edit = require_roles(Role.ADMIN, Role.SUPERVISOR)
can_delete = require_roles(Role.ADMIN)

NOT_FOUND = "Stockpile not found"


# Bodies are validated here so that bad input maps to the route's own 400 message
def _parse(model, payload: Any, error: str):
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        logger.info("Rejected stockpile payload: %s", exc.errors(include_url=False))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)


@router.get("", response_model=List[stockpile_schemas.StockpileResponse])
def list_stockpiles(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return StockpileStore(db).find_all()
    except DatabaseError:
        logger.exception("Fetch stockpiles error")
        raise HTTPException(status_code=500, detail="Failed to fetch stockpiles")


@router.get("/{stockpile_id}", response_model=stockpile_schemas.StockpileResponse)
def get_stockpile(
    stockpile_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        stockpile = StockpileStore(db).find_by_id(stockpile_id)
    except DatabaseError:
        logger.exception("Fetch stockpile error")
        raise HTTPException(status_code=500, detail="Failed to fetch stockpile")
    if stockpile is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return stockpile


@router.post("", response_model=stockpile_schemas.StockpileResponse, status_code=status.HTTP_201_CREATED)
def create_stockpile(
    payload: Any = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(can_edit),
):
    error = "Failed to create stockpile"
    data = _parse(stockpile_schemas.StockpileCreate, payload, error)
    try:
        stockpile = StockpileStore(db).create(data, responsible_team_id=current_user.id)
    except DatabaseError:
        logger.exception("Create stockpile error")
        raise HTTPException(status_code=400, detail=error)
    logger.info("Stockpile %s created by user %s", stockpile["id"], current_user.id)
    return stockpile


# The editor becomes the responsible team, replacing the previous owner
@router.put("/{stockpile_id}", response_model=stockpile_schemas.StockpileResponse)
def update_stockpile(
    stockpile_id: int,
    payload: Any = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(can_edit),
):
    error = "Failed to update stockpile"
    data = _parse(stockpile_schemas.StockpileUpdate, payload, error)
    try:
        stockpile = StockpileStore(db).update(stockpile_id, data, responsible_team_id=current_user.id)
    except DatabaseError:
        logger.exception("Update stockpile error")
        raise HTTPException(status_code=400, detail=error)
    if stockpile is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    logger.info("Stockpile %s updated by user %s", stockpile_id, current_user.id)
    return stockpile


@router.delete("/{stockpile_id}", response_model=MessageResponse)
def delete_stockpile(
    stockpile_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_delete),
):
    try:
        deleted = StockpileStore(db).delete(stockpile_id)
    except DatabaseError:
        logger.exception("Delete stockpile error")
        raise HTTPException(status_code=500, detail="Failed to delete stockpile")
    if not deleted:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    logger.info("Stockpile %s deleted by user %s", stockpile_id, current_user.id)
    return {"message": "Stockpile deleted successfully"}
