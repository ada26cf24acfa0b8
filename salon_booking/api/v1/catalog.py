from fastapi import APIRouter, Depends, HTTPException

from salon_booking.api.v1.schemas import BranchSchema, ServiceSchema, StylistSchema
from salon_booking.application.exceptions import CatalogUnavailableError
from salon_booking.application.use_cases.catalog import CatalogUseCase
from salon_booking.wiring.dependencies import get_catalog_use_case

router = APIRouter()


@router.get("/branches", response_model=list[BranchSchema])
def list_branches(uc: CatalogUseCase = Depends(get_catalog_use_case)):
    try:
        return [BranchSchema.from_entity(b) for b in uc.list_branches()]
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/branches/{branch_id}/services", response_model=list[ServiceSchema])
def list_services(branch_id: str, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    try:
        if uc.get_active_branch(branch_id) is None:
            raise HTTPException(status_code=404, detail=f"Branch {branch_id} not found")
        return [ServiceSchema.from_entity(s) for s in uc.list_services(branch_id)]
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/branches/{branch_id}/stylists", response_model=list[StylistSchema])
def list_stylists(
    branch_id: str,
    service_id: str | None = None,
    available_only: bool = True,
    uc: CatalogUseCase = Depends(get_catalog_use_case),
):
    try:
        if uc.get_active_branch(branch_id) is None:
            raise HTTPException(status_code=404, detail=f"Branch {branch_id} not found")
        stylists = uc.list_stylists(branch_id, service_id=service_id, available_only=available_only)
        return [StylistSchema.from_entity(s) for s in stylists]
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))
