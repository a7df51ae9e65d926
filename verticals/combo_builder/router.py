"""Combo builder API router.

Three groups of endpoints under one prefix:
- Customize: edit the in-progress configuration, preview it per device, and
  manage the discount offer attached to the combo
- Templates: save, list, toggle, delete and re-apply named designs
- Discounts: the catalog plus creation of real codes on the commerce platform

A separate ``receiver_router`` exposes the JSON-lines receiver log.
"""

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse, Response

from patterns.rules_engine import check_required_fields
from verticals.combo_builder.commerce import DiscountDraft, ShopifyDiscountAdapter
from verticals.combo_builder.dependencies import (
    get_config_store,
    get_discount_adapter,
    get_discount_catalog,
    get_receiver_log,
)
from verticals.combo_builder.device import DEVICE_PAIRS, Device
from verticals.combo_builder.discount_service import (
    create_discount,
    create_local_discount,
    create_offer_discount,
)
from verticals.combo_builder.discounts import DiscountCatalog
from verticals.combo_builder.errors import ErrorKind, InvalidDevice, OperationResult, UnknownParameter
from verticals.combo_builder.models.schemas import (
    BulkUpdate,
    ConfigResponse,
    DiscountCreate,
    DiscountUpdate,
    OfferSelection,
    OfferToggle,
    PairedUpdate,
    ParamUpdate,
    TemplateCreate,
    TemplateListResponse,
    TemplateUpdate,
)
from verticals.combo_builder.offer import offer_state, select_discount, set_offer
from verticals.combo_builder.receiver import ReceiverLog
from verticals.combo_builder.renderer import render
from verticals.combo_builder.repository import TemplateRepository, get_template_repository
from verticals.combo_builder.schema import PARAMETERS
from verticals.combo_builder.store import PAIRED_CONTROLS, ConfigStore, Configuration, merge_with_defaults

logger = logging.getLogger(__name__)

router = APIRouter()
receiver_router = APIRouter()


def _config_body(config: Configuration) -> dict[str, Any]:
    return {"config": config.to_dict(), "offer_state": offer_state(config).value}


def _result_response(result: OperationResult, success_status: int = 200) -> JSONResponse:
    status = success_status if result.ok else result.status_code
    return JSONResponse(status_code=status, content=result.to_dict())


def _draft(request: DiscountCreate) -> DiscountDraft:
    return DiscountDraft(
        title=request.title or "",
        value=request.value,
        type=request.type,
        code=request.code or "",
        starts_at=request.starts_at,
        ends_at=request.ends_at,
        once_per_customer=request.once_per_customer,
    )


# ============================================================================
# Customize Endpoints
# ============================================================================

@router.get("/customize", response_model=ConfigResponse)
async def get_customization(store: ConfigStore = Depends(get_config_store)):
    """Current editor configuration."""
    return _config_body(store.config)


@router.get("/customize/schema")
async def get_parameter_schema():
    """Parameter descriptors plus the paired-control and device-pair tables."""
    return {
        "parameters": [descriptor.to_dict() for descriptor in PARAMETERS],
        "paired_controls": {name: list(keys) for name, keys in PAIRED_CONTROLS.items()},
        "device_pairs": {name: list(keys) for name, keys in DEVICE_PAIRS.items()},
    }


@router.patch("/customize/params/{key}")
async def update_parameter(
    key: str,
    request: ParamUpdate,
    store: ConfigStore = Depends(get_config_store),
):
    """Set one parameter; the value is normalized, never rejected."""
    try:
        config = await asyncio.to_thread(store.set, key, request.value)
    except UnknownParameter as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return {"key": key, "value": config[key], **_config_body(config)}


@router.patch("/customize/params")
async def update_parameters(
    request: BulkUpdate,
    store: ConfigStore = Depends(get_config_store),
):
    """Set several parameters in one atomic update."""
    try:
        config = await asyncio.to_thread(store.update_many, request.values)
    except UnknownParameter as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return _config_body(config)


@router.patch("/customize/paired")
async def update_paired(
    request: PairedUpdate,
    store: ConfigStore = Depends(get_config_store),
):
    """Write one value to two keys atomically."""
    try:
        config = await asyncio.to_thread(store.apply_paired, request.key_a, request.key_b, request.value)
    except UnknownParameter as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return _config_body(config)


@router.patch("/customize/controls/{control}")
async def update_control(
    control: str,
    request: ParamUpdate,
    store: ConfigStore = Depends(get_config_store),
):
    """Apply a named symmetric control (e.g. vertical container padding)."""
    try:
        config = await asyncio.to_thread(store.apply_control, control, request.value)
    except UnknownParameter as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return _config_body(config)


@router.post("/customize/reset", response_model=ConfigResponse)
async def reset_customization(store: ConfigStore = Depends(get_config_store)):
    """Restore every parameter to its default."""
    return _config_body(await asyncio.to_thread(store.reset))


@router.get("/customize/preview")
async def preview(
    device: str = Query(Device.DESKTOP.value),
    store: ConfigStore = Depends(get_config_store),
):
    """Render tree for the current configuration on ``device``."""
    try:
        tree = render(store.config, device)
    except InvalidDevice as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return tree.to_dict()


@router.post("/customize/offer")
async def toggle_offer(
    request: OfferToggle,
    store: ConfigStore = Depends(get_config_store),
    catalog: DiscountCatalog = Depends(get_discount_catalog),
):
    """Answer "Do you have a discount offer?" with yes or no."""
    active = catalog.list_active()
    config = await asyncio.to_thread(
        store.update_with, lambda current: set_offer(current, request.enabled, active)
    )
    return _config_body(config)


@router.put("/customize/offer/selection")
async def select_offer_discount(
    request: OfferSelection,
    store: ConfigStore = Depends(get_config_store),
    catalog: DiscountCatalog = Depends(get_discount_catalog),
):
    """Pick which active discount the combo offers."""
    if request.discount_id is not None:
        record = catalog.get(request.discount_id)
        if record is None or not record.is_active:
            raise HTTPException(status_code=404, detail="Active discount not found")
    try:
        config = await asyncio.to_thread(
            store.update_with, lambda current: select_discount(current, request.discount_id)
        )
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return _config_body(config)


@router.post("/customize/discounts")
async def create_offer_discount_endpoint(
    request: DiscountCreate,
    store: ConfigStore = Depends(get_config_store),
    catalog: DiscountCatalog = Depends(get_discount_catalog),
    adapter: ShopifyDiscountAdapter = Depends(get_discount_adapter),
):
    """Create a code on the platform and select it as the combo's offer."""
    result = await create_offer_discount(_draft(request), adapter, catalog, store)
    return _result_response(result)


# ============================================================================
# Template Endpoints
# ============================================================================

async def _template_failure(repo: TemplateRepository, exc: Exception) -> JSONResponse:
    """Roll back the request's session and answer 500 with the error text."""
    logger.error("Template persistence failed", exc_info=exc)
    await repo.session.rollback()
    result = OperationResult.failure(ErrorKind.INTERNAL_FAILURE, str(exc) or "Internal server error")
    return _result_response(result)


@router.get("/templates", response_model=TemplateListResponse)
async def list_templates(repo: TemplateRepository = Depends(get_template_repository)):
    """Saved templates, newest first, with the active count."""
    try:
        templates = await repo.list_recent()
        active_count = await repo.count_active()
    except Exception as exc:
        return await _template_failure(repo, exc)
    return {"templates": templates, "active_count": active_count}


@router.post("/templates", status_code=201)
async def create_template(
    request: TemplateCreate,
    repo: TemplateRepository = Depends(get_template_repository),
):
    """Save a design under a title."""
    data = request.model_dump()
    check = check_required_fields(data, ("title", "config"), message="Missing title or config")
    if not check.passed:
        raise HTTPException(status_code=400, detail=check.message)

    config = merge_with_defaults(request.config)
    try:
        template = await repo.create_template(request.title, config.to_dict())
    except Exception as exc:
        return await _template_failure(repo, exc)
    logger.info("Template %s saved: %s", template["id"], template["title"])
    return {"success": True, "template": template}


@router.patch("/templates/{template_id}")
async def update_template(
    template_id: int,
    request: TemplateUpdate,
    repo: TemplateRepository = Depends(get_template_repository),
):
    """Rename a template or toggle its active flag."""
    updates = request.model_dump(exclude_unset=True)
    try:
        template = await repo.update(template_id, updates)
    except Exception as exc:
        return await _template_failure(repo, exc)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return {"success": True, "template": template}


@router.delete("/templates/{template_id}", status_code=204)
async def delete_template(
    template_id: int,
    repo: TemplateRepository = Depends(get_template_repository),
):
    try:
        deleted = await repo.delete(template_id)
    except Exception as exc:
        return await _template_failure(repo, exc)
    if not deleted:
        raise HTTPException(status_code=404, detail="Template not found")
    return Response(status_code=204)


@router.post("/templates/{template_id}/apply")
async def apply_template(
    template_id: int,
    repo: TemplateRepository = Depends(get_template_repository),
    store: ConfigStore = Depends(get_config_store),
):
    """Load a saved design into the editor, merged over the defaults."""
    try:
        template = await repo.get(template_id)
    except Exception as exc:
        return await _template_failure(repo, exc)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    config = await asyncio.to_thread(store.load, template["config"])
    return {"template_id": template_id, **_config_body(config)}



# ============================================================================
# Discount Endpoints
# ============================================================================

@router.get("/discounts")
async def list_discounts(catalog: DiscountCatalog = Depends(get_discount_catalog)):
    """Every catalog record plus the dashboard stats."""
    return {
        "discounts": [record.to_dict() for record in catalog.list_all()],
        "stats": catalog.stats().to_dict(),
    }


@router.get("/discounts/active")
async def list_active_discounts(catalog: DiscountCatalog = Depends(get_discount_catalog)):
    """Active discounts, as offered in the combo's discount dropdown."""
    return {"discounts": [ref.to_dict() for ref in catalog.references()]}


@router.post("/discounts")
async def create_platform_discount(
    request: DiscountCreate,
    catalog: DiscountCatalog = Depends(get_discount_catalog),
    adapter: ShopifyDiscountAdapter = Depends(get_discount_adapter),
):
    """Create a discount code on the commerce platform."""
    result = await create_discount(_draft(request), adapter, catalog)
    return _result_response(result)


@router.post("/discounts/local")
async def create_catalog_discount(
    request: DiscountCreate,
    catalog: DiscountCatalog = Depends(get_discount_catalog),
):
    """Add a catalog record without calling the platform."""
    result = create_local_discount(_draft(request), catalog)
    return _result_response(result, success_status=201)


@router.patch("/discounts/{discount_id}")
async def update_discount(
    discount_id: int,
    request: DiscountUpdate,
    catalog: DiscountCatalog = Depends(get_discount_catalog),
):
    record = catalog.update(discount_id, request.model_dump(exclude_unset=True))
    if record is None:
        raise HTTPException(status_code=404, detail="Discount not found")
    return record.to_dict()


@router.delete("/discounts/{discount_id}", status_code=204)
async def delete_discount(
    discount_id: int,
    catalog: DiscountCatalog = Depends(get_discount_catalog),
    store: ConfigStore = Depends(get_config_store),
):
    """Delete a record; a combo offering it loses its selection."""
    if not catalog.delete(discount_id):
        raise HTTPException(status_code=404, detail="Discount not found")
    if store.config["selected_discount_id"] == discount_id:
        await asyncio.to_thread(store.update_with, lambda current: select_discount(current, None))
    return Response(status_code=204)


@router.post("/discounts/{discount_id}/duplicate", status_code=201)
async def duplicate_discount(
    discount_id: int,
    catalog: DiscountCatalog = Depends(get_discount_catalog),
):
    record = catalog.duplicate(discount_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Discount not found")
    return record.to_dict()


# ============================================================================
# Receiver
# ============================================================================

@receiver_router.post("/receiver")
async def receive(request: Request, log: ReceiverLog = Depends(get_receiver_log)):
    """Append the posted JSON object to the receiver log."""
    try:
        payload = await request.json()
        await asyncio.to_thread(log.append, payload)
    except (ValueError, TypeError, OSError) as exc:
        logger.error("Receiver write failed", exc_info=True)
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})
    return {"success": True}
