from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from leisure_pricing.database.connection import get_db
from leisure_pricing.dependencies.auth import get_current_business_user
from leisure_pricing.schemas.pricing_rule import (
    PricingRuleCreate,
    PricingRuleResponse,
    PricingRuleUpdate,
)
from leisure_pricing.services.pricing_service.pricing_service import (
    activate_pricing_rule,
    create_pricing_rule,
    deactivate_pricing_rule,
    delete_pricing_rule,
    get_pricing_rule,
    get_pricing_rules,
    update_pricing_rule,
)

router = APIRouter(prefix="/pricing-rules", tags=["Pricing Rules"])


@router.post("/", response_model=PricingRuleResponse, status_code=201)
def create_rule(
    rule: PricingRuleCreate,
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    return create_pricing_rule(db, business_user_id, rule)


@router.get("/", response_model=list[PricingRuleResponse])
def list_rules(
    offer_id: Optional[str] = None,
    include_inactive: bool = False,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    return get_pricing_rules(
        db,
        business_user_id,
        offer_id=offer_id,
        include_inactive=include_inactive,
        skip=skip,
        limit=limit,
    )


@router.get("/{rule_id}", response_model=PricingRuleResponse)
def get_rule(
    rule_id: str,
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    rule = get_pricing_rule(db, business_user_id, rule_id)
    if not rule:
        raise HTTPException(status_code=404, detail="Rule not found")
    return rule


@router.put("/{rule_id}", response_model=PricingRuleResponse)
def update_rule(
    rule_id: str,
    rule: PricingRuleUpdate,
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    updated = update_pricing_rule(db, business_user_id, rule_id, rule)
    if not updated:
        raise HTTPException(status_code=404, detail="Rule not found")
    return updated


@router.delete("/{rule_id}", response_model=PricingRuleResponse)
def deactivate_rule(
    rule_id: str,
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    rule = deactivate_pricing_rule(db, business_user_id, rule_id)
    if not rule:
        raise HTTPException(status_code=404, detail="Rule not found")
    return rule


@router.post("/{rule_id}/activate", response_model=PricingRuleResponse)
def activate_rule(
    rule_id: str,
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    rule = activate_pricing_rule(db, business_user_id, rule_id)
    if not rule:
        raise HTTPException(status_code=404, detail="Rule not found")
    return rule


@router.delete("/{rule_id}/purge", status_code=204)
def purge_rule(
    rule_id: str,
    db: Session = Depends(get_db),
    business_user_id: str = Depends(get_current_business_user),
):
    """Permanently remove a rule. Prefer deactivation to keep history."""
    if not delete_pricing_rule(db, business_user_id, rule_id):
        raise HTTPException(status_code=404, detail="Rule not found")
