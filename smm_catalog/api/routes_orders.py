from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from smm_catalog.api.deps import get_db
from smm_catalog.api.schemas import OrderIn, OrderOut, OrderStatusBatchIn, RefillOut, RemoteOrderOut
from smm_catalog.services import orders

router = APIRouter(prefix="/providers/{provider_id}/orders", tags=["orders"])


@router.post("", response_model=OrderOut)
def create_order(provider_id: int, body: OrderIn, mock: bool = Query(False), db: Session = Depends(get_db)) -> OrderOut:
    manager = orders.for_provider(db, provider_id, force_mock=mock)
    result = manager.create_order(body.service_id, body.link, body.quantity, body.extra_params)
    return OrderOut.model_validate(result)


@router.post("/status", response_model=dict[str, RemoteOrderOut])
def order_statuses(
    provider_id: int,
    body: OrderStatusBatchIn,
    mock: bool = Query(False),
    db: Session = Depends(get_db),
) -> dict[str, RemoteOrderOut]:
    result = orders.for_provider(db, provider_id, force_mock=mock).get_multiple_order_status(body.order_ids)
    return {order_id: RemoteOrderOut.model_validate(order) for order_id, order in result.orders.items()}


@router.get("/{order_id}", response_model=RemoteOrderOut)
def order_status(provider_id: int, order_id: str, mock: bool = Query(False), db: Session = Depends(get_db)) -> RemoteOrderOut:
    return RemoteOrderOut.model_validate(orders.for_provider(db, provider_id, force_mock=mock).get_order_status(order_id))


@router.post("/{order_id}/refill", response_model=RefillOut)
def refill_order(provider_id: int, order_id: str, mock: bool = Query(False), db: Session = Depends(get_db)) -> RefillOut:
    return RefillOut.model_validate(orders.for_provider(db, provider_id, force_mock=mock).refill_order(order_id))
