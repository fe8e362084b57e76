"""Skills router -- browse, publish and rate skills."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from skillshare.controller import SkillShareController
from skillshare.exceptions import RecordNotFound
from skillshare.models import ALL_CATEGORIES, SkillCategory, SkillDraft
from skillshare.read_model import filter_records
from skillshare.wallet import StaticWalletProvider

from web.backend.app.models.api import (
    ActivityEntryResponse,
    CategoryStatResponse,
    ConnectWalletRequest,
    LearnResponse,
    RateSkillRequest,
    SkillListResponse,
    SkillResponse,
    SubmitSkillRequest,
    TransactionResponse,
    WalletResponse,
)

router = APIRouter(prefix="/api", tags=["skills"])


def get_controller(request: Request) -> SkillShareController:
    """Return the controller owned by the running application."""
    return request.app.state.controller


# ---------------------------------------------------------------------------
# Browse
# ---------------------------------------------------------------------------


@router.get("/skills", response_model=SkillListResponse, summary="List skills")
async def list_skills(
    search: str = Query("", description="Case-insensitive match on category or owner"),
    category: str = Query(ALL_CATEGORIES, description="Category name or 'all'"),
    controller: SkillShareController = Depends(get_controller),
):
    """List loaded skills, newest first, filtered by search term and category."""
    if category != ALL_CATEGORIES and SkillCategory.parse(category) is None:
        raise HTTPException(status_code=400, detail=f"Unknown category '{category}'")

    entries = filter_records(controller.records, search, category)
    return SkillListResponse(
        entries=[SkillResponse.from_record(r) for r in entries],
        total_count=len(entries),
        search=search,
        category=category,
    )


@router.post("/skills/refresh", response_model=SkillListResponse, summary="Reload skills")
async def refresh_skills(controller: SkillShareController = Depends(get_controller)):
    """Reload every indexed skill from the store."""
    records = await controller.load_all()
    return SkillListResponse(
        entries=[SkillResponse.from_record(r) for r in records],
        total_count=len(records),
    )


@router.get("/skills/stats", response_model=list[CategoryStatResponse], summary="Category distribution")
async def skill_stats(controller: SkillShareController = Depends(get_controller)):
    return [CategoryStatResponse.from_stat(s) for s in controller.statistics]


@router.get("/skills/{skill_id}", response_model=SkillResponse, summary="Get one skill")
async def get_skill(skill_id: str, controller: SkillShareController = Depends(get_controller)):
    record = controller.find_record(skill_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Skill '{skill_id}' not found")
    return SkillResponse.from_record(record)


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


@router.post("/skills", response_model=TransactionResponse, summary="Share a skill")
async def submit_skill(
    req: SubmitSkillRequest,
    controller: SkillShareController = Depends(get_controller),
):
    """Publish a skill. Failures are reported in the transaction state."""
    draft = SkillDraft(category=req.category, description=req.description, experience=req.experience)
    ok = await controller.submit(draft)
    return TransactionResponse.from_state(controller.transaction, ok=ok)


@router.post("/skills/{skill_id}/rating", response_model=TransactionResponse, summary="Rate a skill")
async def rate_skill(
    skill_id: str,
    req: RateSkillRequest,
    controller: SkillShareController = Depends(get_controller),
):
    ok = await controller.rate(skill_id, req.stars)
    return TransactionResponse.from_state(controller.transaction, ok=ok)


@router.post("/skills/{skill_id}/learn", response_model=LearnResponse, summary="Request to learn")
async def learn_skill(skill_id: str, controller: SkillShareController = Depends(get_controller)):
    try:
        message = controller.request_to_learn(skill_id)
    except RecordNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return LearnResponse(skill_id=skill_id, message=message)


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------


@router.get("/transaction", response_model=TransactionResponse, summary="Current transaction state")
async def transaction_state(controller: SkillShareController = Depends(get_controller)):
    return TransactionResponse.from_state(controller.transaction)


@router.get("/activity", response_model=list[ActivityEntryResponse], summary="Recent activity")
async def activity(
    limit: Optional[int] = Query(None, ge=1),
    controller: SkillShareController = Depends(get_controller),
):
    entries = controller.activity.entries
    if limit is not None:
        entries = entries[:limit]
    return [ActivityEntryResponse.from_entry(e) for e in entries]


# ---------------------------------------------------------------------------
# Wallet
# ---------------------------------------------------------------------------


@router.post("/wallet", response_model=WalletResponse, summary="Connect a wallet")
async def connect_wallet(
    req: ConnectWalletRequest,
    controller: SkillShareController = Depends(get_controller),
):
    session = await controller.connect_wallet(StaticWalletProvider([req.address]))
    if session is None:
        raise HTTPException(status_code=502, detail="Failed to connect wallet")
    return WalletResponse(connected=True, address=session.address)


@router.delete("/wallet", response_model=WalletResponse, summary="Disconnect the wallet")
async def disconnect_wallet(controller: SkillShareController = Depends(get_controller)):
    controller.disconnect_wallet()
    return WalletResponse(connected=False)
