import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from leisure_pricing.database.connection import get_db
from leisure_pricing.dependencies.auth import require_admin
from leisure_pricing.middleware.metrics import get_metrics
from leisure_pricing.models.pricing_rule import PricingRule
from leisure_pricing.models.promotion import Promotion, RecurringPromotion
from leisure_pricing.schemas.system import HealthCheckResponse, SystemMetricsResponse
from leisure_pricing.services.scheduler_service import flash_offer_cache

logger = logging.getLogger(__name__)

router = APIRouter(tags=["System"])


def _uptime(request: Request, now: datetime) -> float:
    start_time = getattr(request.app.state, "start_time", now)
    return (now - start_time).total_seconds()


def _count_active(db: Session, model) -> int:
    return (
        db.query(func.count())
        .select_from(model)
        .filter(model.is_active.is_(True))
        .scalar()
    ) or 0


@router.get("/health", response_model=HealthCheckResponse)
def health_check(request: Request, db: Session = Depends(get_db)):
    """
    Lightweight public health check.
    Returns ok + DB connectivity check (SELECT 1).
    """
    now = datetime.utcnow()

    db_ok = True
    extra = {}
    try:
        db.execute(select(1))
    except SQLAlchemyError as e:
        logger.error("Health check database probe failed: %s", e)
        db_ok = False
        extra["db_error"] = str(e)

    return HealthCheckResponse(
        status="ok" if db_ok else "degraded",
        now=now,
        uptime_seconds=_uptime(request, now),
        db_ok=db_ok,
        extra=extra or None,
    )


@router.get("/metrics", response_model=SystemMetricsResponse, dependencies=[Depends(require_admin)])
def system_metrics(request: Request, db: Session = Depends(get_db)):
    """
    Admin-only system metrics in JSON form.
    In-process counters from app.state.metrics plus DB-derived counts.
    """
    now = datetime.utcnow()

    metrics = get_metrics(request.app)
    requests_count = int(metrics.get("requests", 0))
    total_response_ms = float(metrics.get("total_response_ms", 0.0))
    avg_response_ms = (total_response_ms / requests_count) if requests_count > 0 else None

    return SystemMetricsResponse(
        uptime_seconds=_uptime(request, now),
        now=now,
        requests_count=requests_count,
        avg_response_ms=avg_response_ms,
        price_calculations=int(metrics.get("price_calculations", 0)),
        price_calculation_failures=int(metrics.get("price_calculation_failures", 0)),
        superseded_quotes=int(metrics.get("superseded_quotes", 0)),
        active_pricing_rules=_count_active(db, PricingRule),
        active_recurring_promotions=_count_active(db, RecurringPromotion),
        active_promotions=_count_active(db, Promotion),
        flash_offers_cached=flash_offer_cache.size(),
    )
