"""create offer pricing and promotion tables

Revision ID: 3a1f7c2d9b10
Revises:
Create Date: 2026-10-19 09:12:41.208315

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a1f7c2d9b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        "offers",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("business_user_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=True),
        sa.Column("base_price", sa.Float(), nullable=True),
        sa.Column("pricing_options", sa.JSON(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_offers_business_user_id", "offers", ["business_user_id"])
    op.create_index("ix_offers_status", "offers", ["status"])

    op.create_table(
        "offer_pricing_options",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("offer_id", sa.String(), sa.ForeignKey("offers.id"), nullable=False),
        sa.Column("option_name", sa.String(), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_offer_pricing_options_offer_id", "offer_pricing_options", ["offer_id"])

    op.create_table(
        "business_pricing",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("business_user_id", sa.String(), nullable=False),
        sa.Column("service_name", sa.String(), nullable=False),
        sa.Column("price_amount", sa.Float(), nullable=False),
        sa.Column("price_type", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_business_pricing_business_user_id", "business_pricing", ["business_user_id"])

    op.create_table(
        "business_pricing_rules",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("business_user_id", sa.String(), nullable=False),
        sa.Column("offer_id", sa.String(), nullable=True),
        sa.Column("rule_type", sa.String(), nullable=False),
        sa.Column("rule_name", sa.String(), nullable=False),
        sa.Column("conditions", sa.JSON(), nullable=True),
        sa.Column("price_modifier", sa.Float(), nullable=False, server_default="0"),
        sa.Column("is_percentage", sa.Boolean(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("priority", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_business_pricing_rules_business_user_id", "business_pricing_rules", ["business_user_id"])
    op.create_index("ix_business_pricing_rules_offer_id", "business_pricing_rules", ["offer_id"])
    op.create_index("ix_business_pricing_rules_is_active", "business_pricing_rules", ["is_active"])

    op.create_table(
        "recurring_promotions",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("offer_id", sa.String(), nullable=False),
        sa.Column("days_of_week", sa.JSON(), nullable=True),
        sa.Column("start_time", sa.String(), nullable=False),
        sa.Column("end_time", sa.String(), nullable=False),
        sa.Column("discount_percentage", sa.Float(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_recurring_promotions_offer_id", "recurring_promotions", ["offer_id"])
    op.create_index("ix_recurring_promotions_is_active", "recurring_promotions", ["is_active"])

    op.create_table(
        "promotions",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("offer_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("discount_type", sa.String(), nullable=False),
        sa.Column("discount_value", sa.Float(), nullable=False),
        sa.Column("original_price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("promotional_price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("max_participants", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_promotions_offer_id", "promotions", ["offer_id"])
    op.create_index("ix_promotions_end_date", "promotions", ["end_date"])
    op.create_index("ix_promotions_is_active", "promotions", ["is_active"])

    op.create_table(
        "offer_interactions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("offer_id", sa.String(), nullable=False),
        sa.Column("business_user_id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("kind", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_offer_interactions_offer_id", "offer_interactions", ["offer_id"])
    op.create_index("ix_offer_interactions_user_id", "offer_interactions", ["user_id"])
    op.create_index("ix_offer_interactions_kind", "offer_interactions", ["kind"])


def downgrade():
    op.drop_table("offer_interactions")
    op.drop_table("promotions")
    op.drop_table("recurring_promotions")
    op.drop_table("business_pricing_rules")
    op.drop_table("business_pricing")
    op.drop_table("offer_pricing_options")
    op.drop_table("offers")
