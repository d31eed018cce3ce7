from pydantic import BaseModel
from typing import Optional, Dict, Any
from datetime import datetime


class HealthCheckResponse(BaseModel):
    status: str
    now: datetime
    uptime_seconds: float
    db_ok: bool
    extra: Optional[Dict[str, Any]] = None


class SystemMetricsResponse(BaseModel):
    uptime_seconds: float
    now: datetime

    # middleware counters
    requests_count: int
    avg_response_ms: Optional[float] = None

    # pricing counters
    price_calculations: int = 0
    price_calculation_failures: int = 0
    superseded_quotes: int = 0

    # DB metrics
    active_pricing_rules: int
    active_recurring_promotions: int
    active_promotions: int
    flash_offers_cached: int = 0

    extra: Optional[Dict[str, Any]] = None
