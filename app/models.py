from __future__ import annotations
from datetime import date, datetime
from typing import Optional, List
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    String, Integer, Text, Date, DateTime, JSON, func, Float, Boolean, Index,
    ForeignKey, UniqueConstraint
)
from .database import Base

# ----------------------------
# Scheme catalogue
# ----------------------------
class Scheme(Base):
    __tablename__ = "schemes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(256), unique=True, nullable=False)
    short_code: Mapped[Optional[str]] = mapped_column(String(32), index=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False, server_default="SCHEME")
    authority: Mapped[Optional[str]] = mapped_column(String(256))
    jurisdiction: Mapped[str] = mapped_column(String(64), nullable=False, server_default="Central")
    description: Mapped[Optional[str]] = mapped_column(Text)
    benefits: Mapped[Optional[str]] = mapped_column(Text)
    eligibility: Mapped[Optional[str]] = mapped_column(Text)
    documents_url: Mapped[Optional[str]] = mapped_column(String(512))
    sectors: Mapped[Optional[str]] = mapped_column(Text)         # comma-separated
    company_sizes: Mapped[Optional[str]] = mapped_column(String(64))  # "MICRO,SMALL"
    pillar_e: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    pillar_s: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    pillar_g: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

# ----------------------------
# Recommendation log (audit)
# ----------------------------
class RecommendationLog(Base):
    __tablename__ = "recommendation_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    sector: Mapped[Optional[str]] = mapped_column(String(256))
    size: Mapped[Optional[str]] = mapped_column(String(32))
    state: Mapped[Optional[str]] = mapped_column(String(64))
    udyam_hash: Mapped[Optional[str]] = mapped_column(String(64), index=True)  # sha256 of pepper+udyam
    udyam_valid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    turnover_cr: Mapped[Optional[float]] = mapped_column(Float)
    compliance: Mapped[Optional[List[str]]] = mapped_column(JSON, default=list)
    mandatory: Mapped[Optional[List[str]]] = mapped_column(JSON, default=list)
    optional: Mapped[Optional[List[str]]] = mapped_column(JSON, default=list)
    schemes: Mapped[Optional[List[str]]] = mapped_column(JSON, default=list)
    rules_fired: Mapped[Optional[List[str]]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


# ----------------------------
# Legal / regulatory documents
# ----------------------------
class LegalDoc(Base):
    __tablename__ = "legal_docs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    jurisdiction: Mapped[str] = mapped_column(String(64), nullable=False, server_default="Central")
    sector: Mapped[Optional[str]] = mapped_column(String(256))
    location_tag: Mapped[Optional[str]] = mapped_column(String(128))  # e.g. "Goa"
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    url: Mapped[Optional[str]] = mapped_column(String(1024))
    document_type: Mapped[Optional[str]] = mapped_column(String(32))
    severity: Mapped[Optional[str]] = mapped_column(String(16))
    tags: Mapped[Optional[str]] = mapped_column(Text)  # comma-separated
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

# ----------------------------
# Per-user favourites / application tracking
# ----------------------------
class UserScheme(Base):
    __tablename__ = "user_schemes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    scheme_id: Mapped[int] = mapped_column(ForeignKey("schemes.id", ondelete="CASCADE"), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="INTERESTED")
    is_favorite: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    applied_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    scheme: Mapped[Scheme] = relationship()

    __table_args__ = (
        UniqueConstraint("user_id", "scheme_id", name="uq_user_scheme"),
    )

# ----------------------------
# ESG plans (checklists tied to schemes)
# ----------------------------
class ESGPlan(Base):
    __tablename__ = "esg_plans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    company_name: Mapped[str] = mapped_column(String(256), nullable=False)
    sector: Mapped[Optional[str]] = mapped_column(String(256))
    size: Mapped[Optional[str]] = mapped_column(String(32))
    state: Mapped[Optional[str]] = mapped_column(String(64))
    udyam_hash: Mapped[Optional[str]] = mapped_column(String(64))
    turnover_cr: Mapped[Optional[float]] = mapped_column(Float)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="DRAFT")
    target_date: Mapped[Optional[date]] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    items: Mapped[List["ESGPlanItem"]] = relationship(
        back_populates="plan", cascade="all, delete-orphan",
        order_by=lambda: [ESGPlanItem.order, ESGPlanItem.id],
    )

class ESGPlanItem(Base):
    __tablename__ = "esg_plan_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    plan_id: Mapped[int] = mapped_column(ForeignKey("esg_plans.id", ondelete="CASCADE"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    kind: Mapped[str] = mapped_column(String(16), nullable=False, default="CUSTOM")  # MANDATORY|OPTIONAL|SCHEME|CUSTOM
    pillar: Mapped[Optional[str]] = mapped_column(String(16))
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default="MEDIUM")
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="PENDING")
    due_date: Mapped[Optional[date]] = mapped_column(Date)
    scheme_id: Mapped[Optional[int]] = mapped_column(ForeignKey("schemes.id", ondelete="SET NULL"))
    scheme_code: Mapped[Optional[str]] = mapped_column(String(32))
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    plan: Mapped[ESGPlan] = relationship(back_populates="items")

Index("ix_schemes_active_priority", Scheme.is_active, Scheme.priority)
