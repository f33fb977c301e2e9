"""Initial profile schema: users, coach profiles and profile sections."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "20261019_01_profile_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
    ]


def _user_fk(ondelete: str = "CASCADE", nullable: bool = False, name: str = "user_id") -> sa.Column:
    return sa.Column(name, sa.String(length=36), sa.ForeignKey("users.id", ondelete=ondelete), nullable=nullable)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        *_timestamps(),
        sa.Column("external_id", sa.String(length=128), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("first_name", sa.String(length=128), nullable=True),
        sa.Column("last_name", sa.String(length=128), nullable=True),
        sa.Column("display_name", sa.String(length=256), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("profile_image_url", sa.String(length=1024), nullable=True),
        sa.Column("primary_market", sa.String(length=256), nullable=True),
        sa.Column("total_years_re", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("capabilities", sa.JSON(), nullable=False),
        sa.Column("is_coach", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_mentee", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("languages", sa.JSON(), nullable=False),
        sa.Column("real_estate_domains", sa.JSON(), nullable=False),
        sa.Column("primary_domain", sa.String(length=32), nullable=True),
        sa.Column("system_role", sa.String(length=32), nullable=False, server_default="USER"),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="ACTIVE"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_external_id", "users", ["external_id"], unique=True)

    op.create_table(
        "organizations",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        *_timestamps(),
        sa.Column("parent_id", sa.String(length=36), sa.ForeignKey("organizations.id", ondelete="SET NULL"), nullable=True),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False, server_default="BUSINESS"),
        sa.Column("level", sa.String(length=32), nullable=False, server_default="LOCAL"),
        sa.Column("tier", sa.String(length=32), nullable=False, server_default="FREE"),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="PENDING"),
        sa.Column("description", sa.Text(), nullable=True),
    )

    op.create_table(
        "organization_members",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        *_timestamps(),
        sa.Column(
            "organization_id",
            sa.String(length=36),
            sa.ForeignKey("organizations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _user_fk(),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="MEMBER"),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="ACTIVE"),
        sa.UniqueConstraint("organization_id", "user_id", name="uq_org_member"),
    )

    op.create_table(
        "coach_profiles",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        *_timestamps(),
        _user_fk(),
        sa.Column("coach_skills", sa.JSON(), nullable=False),
        sa.Column("coach_real_estate_domains", sa.JSON(), nullable=False),
        sa.Column("coach_primary_domain", sa.String(length=32), nullable=True),
        sa.Column("years_coaching", sa.Integer(), nullable=True),
        sa.Column("hourly_rate", sa.Float(), nullable=True),
        sa.Column("calendly_url", sa.String(length=1024), nullable=True),
        sa.Column("event_type_url", sa.String(length=1024), nullable=True),
        sa.Column("default_duration", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("minimum_duration", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("maximum_duration", sa.Integer(), nullable=False, server_default="120"),
        sa.Column("allow_custom_duration", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("profile_status", sa.String(length=16), nullable=False, server_default="DRAFT"),
        sa.Column("completion_percentage", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("total_sessions", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("average_rating", sa.Float(), nullable=True),
        sa.UniqueConstraint("user_id", name="uq_coach_profiles_user"),
    )

    op.create_table(
        "domain_profiles",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        *_timestamps(),
        _user_fk(),
        sa.Column("domain", sa.String(length=32), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.UniqueConstraint("user_id", "domain", name="uq_domain_profiles_user_domain"),
    )

    op.create_table(
        "portfolio_items",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        *_timestamps(),
        _user_fk(),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=256), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("location", sa.JSON(), nullable=True),
        sa.Column("financial_details", sa.JSON(), nullable=False),
        sa.Column("metrics", sa.JSON(), nullable=False),
        sa.Column("image_urls", sa.JSON(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index("ix_portfolio_items_user_id", "portfolio_items", ["user_id"])

    op.create_table(
        "professional_recognitions",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        *_timestamps(),
        _user_fk(),
        sa.Column(
            "coach_profile_id",
            sa.String(length=36),
            sa.ForeignKey("coach_profiles.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("title", sa.String(length=256), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("issuer", sa.String(length=256), nullable=True),
        sa.Column("issue_date", sa.Date(), nullable=False),
        sa.Column("expiry_date", sa.Date(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("industry_type", sa.String(length=32), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="ACTIVE"),
        sa.Column("verification_url", sa.String(length=1024), nullable=True),
        sa.Column("certificate_url", sa.String(length=1024), nullable=True),
    )
    op.create_index("ix_professional_recognitions_user_id", "professional_recognitions", ["user_id"])

    op.create_table(
        "goals",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        *_timestamps(),
        _user_fk(),
        sa.Column(
            "organization_id",
            sa.String(length=36),
            sa.ForeignKey("organizations.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("title", sa.String(length=256), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("target", sa.Float(), nullable=False, server_default="0"),
        sa.Column("current", sa.Float(), nullable=False, server_default="0"),
        sa.Column("deadline", sa.Date(), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="IN_PROGRESS"),
    )
    op.create_index("ix_goals_user_id", "goals", ["user_id"])

    op.create_table(
        "listings",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        *_timestamps(),
        _user_fk(),
        sa.Column("listing_key", sa.String(length=64), nullable=False),
        sa.Column("street_number", sa.String(length=32), nullable=True),
        sa.Column("street_name", sa.String(length=256), nullable=False),
        sa.Column("city", sa.String(length=128), nullable=False),
        sa.Column("state_or_province", sa.String(length=64), nullable=True),
        sa.Column("postal_code", sa.String(length=16), nullable=True),
        sa.Column("list_price", sa.Float(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="Active"),
        sa.Column("property_type", sa.String(length=32), nullable=False, server_default="Residential"),
        sa.Column("bedrooms_total", sa.Integer(), nullable=True),
        sa.Column("bathrooms_total", sa.Float(), nullable=True),
        sa.Column("living_area", sa.Float(), nullable=True),
        sa.Column("year_built", sa.Integer(), nullable=True),
        sa.Column("public_remarks", sa.Text(), nullable=True),
        sa.Column("listing_contract_date", sa.Date(), nullable=True),
        sa.Column("close_date", sa.Date(), nullable=True),
        sa.Column("close_price", sa.Float(), nullable=True),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint("user_id", "listing_key", name="uq_listings_user_key"),
    )
    op.create_index("ix_listings_user_id", "listings", ["user_id"])

    op.create_table(
        "marketing_profiles",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        *_timestamps(),
        _user_fk(),
        sa.Column(
            "organization_id",
            sa.String(length=36),
            sa.ForeignKey("organizations.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("slogan", sa.String(length=256), nullable=True),
        sa.Column("website_url", sa.String(length=1024), nullable=True),
        sa.Column("blog_url", sa.String(length=1024), nullable=True),
        sa.Column("social_media_links", sa.JSON(), nullable=False),
        sa.Column("marketing_areas", sa.JSON(), nullable=False),
        sa.Column("target_audience", sa.JSON(), nullable=False),
        sa.Column("testimonials", sa.JSON(), nullable=False),
        sa.UniqueConstraint("user_id", name="uq_marketing_profiles_user"),
    )

    op.create_table(
        "coaching_sessions",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        *_timestamps(),
        _user_fk(name="coach_user_id"),
        _user_fk(name="mentee_user_id"),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="SCHEDULED"),
        sa.Column("session_type", sa.String(length=16), nullable=False, server_default="MENTORSHIP"),
        sa.Column("price_amount", sa.Float(), nullable=True),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default="USD"),
        sa.Column("payment_status", sa.String(length=16), nullable=False, server_default="PENDING"),
    )
    op.create_index("ix_coaching_sessions_coach_user_id", "coaching_sessions", ["coach_user_id"])
    op.create_index("ix_coaching_sessions_mentee_user_id", "coaching_sessions", ["mentee_user_id"])

    op.create_table(
        "subscriptions",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        *_timestamps(),
        _user_fk(nullable=True),
        sa.Column(
            "organization_id",
            sa.String(length=36),
            sa.ForeignKey("organizations.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("plan_id", sa.String(length=64), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="ACTIVE"),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("current_period_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("current_period_end", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        *_timestamps(),
        sa.Column(
            "session_id",
            sa.String(length=36),
            sa.ForeignKey("coaching_sessions.id", ondelete="SET NULL"),
            nullable=True,
        ),
        _user_fk(name="payer_user_id"),
        _user_fk(name="payee_user_id"),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default="USD"),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="PENDING"),
        sa.Column("processor_reference", sa.String(length=128), nullable=True),
    )

    op.create_table(
        "audit_events",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        _user_fk(ondelete="SET NULL", nullable=True),
        sa.Column("event_type", sa.String(length=64), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("actor", sa.String(length=128), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
    )
    op.create_index("ix_audit_events_user_id", "audit_events", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_audit_events_user_id", table_name="audit_events")
    op.drop_table("audit_events")
    op.drop_table("payments")
    op.drop_table("subscriptions")
    op.drop_index("ix_coaching_sessions_mentee_user_id", table_name="coaching_sessions")
    op.drop_index("ix_coaching_sessions_coach_user_id", table_name="coaching_sessions")
    op.drop_table("coaching_sessions")
    op.drop_table("marketing_profiles")
    op.drop_index("ix_listings_user_id", table_name="listings")
    op.drop_table("listings")
    op.drop_index("ix_goals_user_id", table_name="goals")
    op.drop_table("goals")
    op.drop_index("ix_professional_recognitions_user_id", table_name="professional_recognitions")
    op.drop_table("professional_recognitions")
    op.drop_index("ix_portfolio_items_user_id", table_name="portfolio_items")
    op.drop_table("portfolio_items")
    op.drop_table("domain_profiles")
    op.drop_table("coach_profiles")
    op.drop_table("organization_members")
    op.drop_table("organizations")
    op.drop_index("ix_users_external_id", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
