"""Buyer CRUD, CSV export and CSV import endpoints."""

from enum import Enum
from typing import TypeVar

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status

from lead_intake.application.schemas.buyer import (
    BuyerCreate,
    BuyerDeleteResponse,
    BuyerDetailResponse,
    BuyerListResponse,
    BuyerResponse,
    BuyerUpdate,
    HistoryEntryResponse,
    ImportResponse,
    ImportResultsResponse,
    PaginationResponse,
)
from lead_intake.application.services import BulkTransferService, BuyerService
from lead_intake.domain.entities import BuyerFilter, BuyerStatus, City, Principal, PropertyType
from lead_intake.domain.exceptions import ValidationFailedError
from lead_intake.infrastructure.dependencies import (
    get_bulk_transfer_service,
    get_buyer_service,
    get_current_principal,
)

router = APIRouter(prefix="/buyers", tags=["Buyers"])

EnumT = TypeVar("EnumT", bound=Enum)


# ── Helpers ──────────────────────────────────────────────────────────


def _enum_filter(enum_cls: type[EnumT], raw: str | None, field: str) -> EnumT | None:
    """Blank means "no filter"; anything else must be a known value."""
    if not raw:
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValidationFailedError.single(field, f"Must be one of: {allowed}")


# ── Collection ───────────────────────────────────────────────────────


@router.get("", response_model=BuyerListResponse)
async def list_buyers(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    search: str | None = Query(None, description="Substring of name, phone or email"),
    city: str | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
    property_type: str | None = Query(None, alias="propertyType"),
    principal: Principal = Depends(get_current_principal),
    service: BuyerService = Depends(get_buyer_service),
) -> BuyerListResponse:
    """List buyers. Admins see every record, other users only their own."""
    filters = BuyerFilter(
        search=search or None,
        city=_enum_filter(City, city, "city"),
        status=_enum_filter(BuyerStatus, status_filter, "status"),
        property_type=_enum_filter(PropertyType, property_type, "propertyType"),
    )
    result = await service.list_buyers(principal, filters, page=page, limit=limit)
    return BuyerListResponse(
        buyers=[BuyerResponse.model_validate(b) for b in result.items],
        pagination=PaginationResponse(
            page=result.page, limit=result.limit, total=result.total, pages=result.pages
        ),
    )


@router.post("", response_model=BuyerResponse, status_code=status.HTTP_201_CREATED)
async def create_buyer(
    data: BuyerCreate,
    principal: Principal = Depends(get_current_principal),
    service: BuyerService = Depends(get_buyer_service),
) -> BuyerResponse:
    """Create a buyer owned by the calling user."""
    buyer = await service.create_buyer(data, principal)
    return BuyerResponse.model_validate(buyer)


# ── Bulk transfer ────────────────────────────────────────────────────


@router.get("/export")
async def export_buyers(
    principal: Principal = Depends(get_current_principal),
    service: BulkTransferService = Depends(get_bulk_transfer_service),
) -> Response:
    """Download the caller's visible buyers as CSV."""
    export = await service.export_csv(principal)
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.post("/import", response_model=ImportResponse)
async def import_buyers(
    file: UploadFile | None = File(None),
    principal: Principal = Depends(get_current_principal),
    service: BulkTransferService = Depends(get_bulk_transfer_service),
) -> ImportResponse:
    """Import buyers from an uploaded CSV; bad rows are reported, not fatal."""
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file provided")

    raw = await file.read()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="CSV file must be UTF-8 encoded"
        )

    report = await service.import_csv(principal, text)

    return ImportResponse(
        message=report.message,
        results=ImportResultsResponse(
            success=report.success, failed=report.failed, errors=report.errors
        ),
    )


# ── Single record ────────────────────────────────────────────────────


@router.get("/{buyer_id}", response_model=BuyerDetailResponse)
async def get_buyer(
    buyer_id: str,
    principal: Principal = Depends(get_current_principal),
    service: BuyerService = Depends(get_buyer_service),
) -> BuyerDetailResponse:
    """Any authenticated user may view a buyer and its recent history."""
    detail = await service.get_buyer_detail(buyer_id)
    return BuyerDetailResponse(
        buyer=BuyerResponse.model_validate(detail.buyer),
        history=[HistoryEntryResponse.model_validate(h) for h in detail.history],
    )


@router.put("/{buyer_id}", response_model=BuyerResponse)
async def update_buyer(
    buyer_id: str,
    data: BuyerUpdate,
    principal: Principal = Depends(get_current_principal),
    service: BuyerService = Depends(get_buyer_service),
) -> BuyerResponse:
    """Replace a buyer's fields (owner or admin only)."""
    buyer = await service.update_buyer(buyer_id, data, principal)
    return BuyerResponse.model_validate(buyer)


@router.delete("/{buyer_id}", response_model=BuyerDeleteResponse)
async def delete_buyer(
    buyer_id: str,
    principal: Principal = Depends(get_current_principal),
    service: BuyerService = Depends(get_buyer_service),
) -> BuyerDeleteResponse:
    """Delete a buyer (owner or admin only)."""
    deleted = await service.delete_buyer(buyer_id, principal)
    return BuyerDeleteResponse(
        message="Buyer deleted successfully",
        deleted_buyer=BuyerResponse.model_validate(deleted),
    )
