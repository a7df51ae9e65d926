"""Pydantic schemas for API request/response validation.

Parameter values are typed ``Any`` on purpose: the field validator owns
normalization, so out-of-range or malformed input is clamped or defaulted
rather than rejected with a 422. Required-field checks on discounts and
templates likewise happen in the service layer so they answer with a 400.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Editor requests
# ---------------------------------------------------------------------------

class ParamUpdate(BaseModel):
    value: Any = None


class PairedUpdate(BaseModel):
    key_a: str = Field(..., min_length=1)
    key_b: str = Field(..., min_length=1)
    value: Any = None


class BulkUpdate(BaseModel):
    values: dict[str, Any] = Field(default_factory=dict)


class OfferToggle(BaseModel):
    enabled: bool


class OfferSelection(BaseModel):
    discount_id: Optional[int] = Field(None, ge=1)


# ---------------------------------------------------------------------------
# Discounts
# ---------------------------------------------------------------------------

class DiscountCreate(BaseModel):
    title: Optional[str] = None
    value: Optional[Union[float, str]] = None
    type: str = "percentage"
    code: Optional[str] = None
    starts_at: Optional[str] = None
    ends_at: Optional[str] = None
    once_per_customer: bool = False


class DiscountUpdate(BaseModel):
    title: Optional[str] = None
    type: Optional[str] = None
    value: Optional[Union[float, str]] = None
    status: Optional[str] = None
    usage: Optional[str] = None


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

class TemplateCreate(BaseModel):
    title: Optional[str] = None
    config: Optional[dict[str, Any]] = None


class TemplateUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    active: Optional[bool] = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class ConfigResponse(BaseModel):
    config: dict[str, Any]
    offer_state: str


class TemplateListResponse(BaseModel):
    templates: list[dict[str, Any]]
    active_count: int
