from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Literal, Optional
from datetime import date, datetime

SchemeType = Literal["SCHEME", "CERTIFICATION", "FRAMEWORK", "SUBSIDY", "GRANT", "LOAN", "INCENTIVE"]
CompanySize = Literal["MICRO", "SMALL", "MEDIUM", "LARGE"]
DocumentType = Literal["REGULATION", "GUIDELINE", "NOTIFICATION", "CIRCULAR", "AMENDMENT", "JUDGMENT"]
Severity = Literal["LOW", "MEDIUM", "HIGH", "CRITICAL"]
ApplicationStatus = Literal["INTERESTED", "APPLIED", "UNDER_REVIEW", "APPROVED", "REJECTED", "COMPLETED"]
PlanStatus = Literal["DRAFT", "ACTIVE", "ON_HOLD", "COMPLETED", "CANCELLED"]
ItemStatus = Literal["PENDING", "IN_PROGRESS", "COMPLETED", "BLOCKED", "CANCELLED"]
Priority = Literal["LOW", "MEDIUM", "HIGH", "URGENT"]
Pillar = Literal["ENVIRONMENTAL", "SOCIAL", "GOVERNANCE"]

def split_tokens(v: Any, pipes: bool = False) -> List[str]:
    """"a, b,,c" (or a list, or "a|b" when pipes=True) -> ["a", "b", "c"]."""
    if not v:
        return []
    if isinstance(v, (list, tuple)):
        v = ",".join(str(s) for s in v if s is not None)
    v = str(v)
    if pipes:
        v = v.replace("|", ",")
    return [s.strip() for s in v.split(",") if s.strip()]

# ---------- recommendation ----------
class RecommendInput(BaseModel):
    """Wire body for POST /v1/recommend. Loosely typed: the rules coerce it."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # any JSON value is accepted; non-matching values simply fire no rule
    sector: Any = None
    size: Any = None
    state: Any = None
    udyam: Any = None
    turnover_cr: Any = Field(default=None, alias="turnoverCr")
    compliance: Any = None

    @field_validator("compliance")
    @classmethod
    def split_compliance(cls, v):
        return split_tokens(v)

class RecommendationOut(BaseModel):
    mandatory: List[str]
    optional: List[str]
    schemes: List[str]

class RecommendationLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sector: Optional[str] = None
    size: Optional[str] = None
    state: Optional[str] = None
    udyam_valid: bool
    turnover_cr: Optional[float] = None
    compliance: List[str]
    mandatory: List[str]
    optional: List[str]
    schemes: List[str]
    rules_fired: List[str]
    created_at: Optional[datetime] = None

# ---------- scheme catalogue ----------
class SchemeIn(BaseModel):
    name: str = Field(min_length=1)
    short_code: Optional[str] = None
    type: SchemeType = "SCHEME"
    authority: str = Field(min_length=1)
    jurisdiction: str = "Central"
    description: str = ""
    benefits: Optional[str] = None
    eligibility: Optional[str] = None
    documents_url: Optional[str] = None
    sectors: List[str] = Field(default_factory=list)
    company_sizes: List[CompanySize] = Field(default_factory=list)
    pillar_e: bool = False
    pillar_s: bool = False
    pillar_g: bool = False
    priority: int = Field(default=5, ge=0, le=10)
    is_active: bool = True

    @field_validator("name", "authority")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("short_code")
    @classmethod
    def clean_code(cls, v: Optional[str]) -> Optional[str]:
        v = (v or "").strip()
        return v or None

class SchemeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    short_code: Optional[str] = None
    type: str
    authority: Optional[str] = None
    jurisdiction: str
    description: Optional[str] = None
    benefits: Optional[str] = None
    eligibility: Optional[str] = None
    documents_url: Optional[str] = None
    sectors: List[str]
    company_sizes: List[str]
    pillar_e: bool
    pillar_s: bool
    pillar_g: bool
    priority: int
    is_active: bool

    @field_validator("sectors", "company_sizes", mode="before")
    @classmethod
    def split_csv(cls, v):
        return split_tokens(v)

class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

class SchemeListResponse(BaseModel):
    schemes: List[SchemeOut]
    pagination: Pagination

class ImportResult(BaseModel):
    count: int
    created: int
    updated: int

# ---------- legal documents ----------
class LegalDocIn(BaseModel):
    title: str = Field(min_length=1)
    jurisdiction: Optional[str] = "Central"
    sector: Optional[str] = None
    location_tag: Optional[str] = None
    summary: str = ""
    url: Optional[str] = None
    document_type: Optional[DocumentType] = None
    severity: Optional[Severity] = None
    tags: Any = Field(default=None, validate_default=True)  # "a, b" / "a|b" / ["a", "b"]
    is_active: bool = True

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("jurisdiction")
    @classmethod
    def default_jurisdiction(cls, v: Optional[str]) -> str:
        return (v or "").strip() or "Central"

    @field_validator("sector", "location_tag", "url")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return (v or "").strip() or None

    @field_validator("tags")
    @classmethod
    def split_tags(cls, v):
        return split_tokens(v, pipes=True)

class LegalDocOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    jurisdiction: str
    sector: Optional[str] = None
    location_tag: Optional[str] = None
    summary: str
    url: Optional[str] = None
    document_type: Optional[str] = None
    severity: Optional[str] = None
    tags: List[str]
    is_active: bool

    @field_validator("tags", mode="before")
    @classmethod
    def split_csv(cls, v):
        return split_tokens(v)

class LegalDocListResponse(BaseModel):
    documents: List[LegalDocOut]
    pagination: Pagination

class ImportCount(BaseModel):
    count: int

# ---------- per-user scheme tracking ----------
class UserSchemeIn(BaseModel):
    user_id: str = Field(min_length=1)
    scheme_id: int
    # omitted fields keep their stored value on update
    status: Optional[ApplicationStatus] = None
    is_favorite: Optional[bool] = None
    notes: Optional[str] = None

class SchemeSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    short_code: Optional[str] = None
    type: str
    authority: Optional[str] = None
    priority: int
    documents_url: Optional[str] = None

class UserSchemeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    scheme_id: int
    status: str
    is_favorite: bool
    notes: Optional[str] = None
    applied_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    scheme: SchemeSummary

# ---------- ESG plans ----------
class ESGPlanItemIn(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    pillar: Optional[Pillar] = None
    priority: Priority = "MEDIUM"
    status: ItemStatus = "PENDING"
    due_date: Optional[date] = None
    scheme_id: Optional[int] = None
    order: Optional[int] = None

class ESGPlanItemUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    priority: Optional[Priority] = None
    status: Optional[ItemStatus] = None
    due_date: Optional[date] = None

class ESGPlanItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    kind: str
    pillar: Optional[str] = None
    priority: str
    status: str
    due_date: Optional[date] = None
    scheme_id: Optional[int] = None
    scheme_code: Optional[str] = None
    order: int

class ESGPlanIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    company_name: str = Field(min_length=1)
    description: Optional[str] = None
    sector: Optional[str] = None
    size: Optional[str] = None
    state: Optional[str] = None
    udyam: Optional[str] = None
    turnover_cr: Any = Field(default=None, alias="turnoverCr")
    compliance: Any = Field(default=None, validate_default=True)
    status: PlanStatus = "DRAFT"
    target_date: Optional[date] = None
    # seed the checklist from the rule engine's recommendation
    from_recommendation: bool = False

    @field_validator("compliance")
    @classmethod
    def split_compliance(cls, v):
        return split_tokens(v)

class ESGPlanOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    name: str
    description: Optional[str] = None
    company_name: str
    sector: Optional[str] = None
    size: Optional[str] = None
    state: Optional[str] = None
    turnover_cr: Optional[float] = None
    status: str
    target_date: Optional[date] = None
    items: List[ESGPlanItemOut]
