import logging
import uuid
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from leisure_pricing.models.offer import Offer
from leisure_pricing.models.pricing_rule import PricingRule
from leisure_pricing.schemas.pricing_rule import (
    PricingRuleCreate,
    PricingRuleUpdate,
    validate_conditions,
)

logger = logging.getLogger(__name__)


def _generate_rule_id() -> str:
    return f"RULE_{uuid.uuid4().hex[:10].upper()}"


def _check_offer_owner(db: Session, business_user_id: str, offer_id: Optional[str]) -> None:
    if offer_id is None:
        return
    offer = db.query(Offer).filter(Offer.id == offer_id).first()
    if not offer:
        raise HTTPException(status_code=400, detail=f"Offer {offer_id} not found")
    if offer.business_user_id != business_user_id:
        raise HTTPException(status_code=403, detail="Offer belongs to another business")


def create_pricing_rule(db: Session, business_user_id: str, rule: PricingRuleCreate) -> PricingRule:
    _check_offer_owner(db, business_user_id, rule.offer_id)

    data = rule.model_dump()
    data["rule_type"] = rule.rule_type.value
    db_rule = PricingRule(id=_generate_rule_id(), business_user_id=business_user_id, **data)
    db.add(db_rule)
    db.commit()
    db.refresh(db_rule)
    logger.info("Created pricing rule %s for business %s", db_rule.id, business_user_id)
    return db_rule


def get_pricing_rules(
    db: Session,
    business_user_id: str,
    offer_id: Optional[str] = None,
    include_inactive: bool = False,
    skip: int = 0,
    limit: int = 100,
) -> List[PricingRule]:
    query = db.query(PricingRule).filter(PricingRule.business_user_id == business_user_id)
    if not include_inactive:
        query = query.filter(PricingRule.is_active.is_(True))
    if offer_id:
        query = query.filter(
            (PricingRule.offer_id == offer_id) | (PricingRule.offer_id.is_(None))
        )
    return (
        query.order_by(PricingRule.priority.desc(), PricingRule.created_at.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_pricing_rule(db: Session, business_user_id: str, rule_id: str) -> Optional[PricingRule]:
    return (
        db.query(PricingRule)
        .filter(PricingRule.id == rule_id, PricingRule.business_user_id == business_user_id)
        .first()
    )


def update_pricing_rule(
    db: Session, business_user_id: str, rule_id: str, rule_update: PricingRuleUpdate
) -> Optional[PricingRule]:
    db_rule = get_pricing_rule(db, business_user_id, rule_id)
    if not db_rule:
        return None

    changes = rule_update.model_dump(exclude_unset=True)
    if "offer_id" in changes:
        _check_offer_owner(db, business_user_id, changes["offer_id"])
    if changes.get("conditions") is not None:
        try:
            validate_conditions(db_rule.rule_type, changes["conditions"])
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    for key, value in changes.items():
        setattr(db_rule, key, value)

    db.commit()
    db.refresh(db_rule)
    return db_rule


def _set_active(db: Session, business_user_id: str, rule_id: str, active: bool) -> Optional[PricingRule]:
    db_rule = get_pricing_rule(db, business_user_id, rule_id)
    if not db_rule:
        return None
    db_rule.is_active = active
    db.commit()
    db.refresh(db_rule)
    return db_rule


def deactivate_pricing_rule(db: Session, business_user_id: str, rule_id: str) -> Optional[PricingRule]:
    return _set_active(db, business_user_id, rule_id, False)


def activate_pricing_rule(db: Session, business_user_id: str, rule_id: str) -> Optional[PricingRule]:
    return _set_active(db, business_user_id, rule_id, True)


def delete_pricing_rule(db: Session, business_user_id: str, rule_id: str) -> bool:
    db_rule = get_pricing_rule(db, business_user_id, rule_id)
    if not db_rule:
        return False
    db.delete(db_rule)
    db.commit()
    logger.info("Deleted pricing rule %s for business %s", rule_id, business_user_id)
    return True
