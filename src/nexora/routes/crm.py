from __future__ import annotations

from dataclasses import asdict
from typing import Literal

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel, Field

from nexora.models import Contact, Deal, DealStatus, Lead, LeadNote
from nexora.store import CRMStore

router = APIRouter(tags=["crm"])


class LeadNoteIn(BaseModel):
    id: str
    date: str
    note: str


class LeadIn(BaseModel):
    id: str = ""
    name: str
    company: str = ""
    email: str = ""
    status: Literal["New", "Contacted", "Qualified", "Lost"] = "New"
    value: float = 0
    last_contact: str = ""
    source: Literal["Website", "Referral", "Cold Call", "Event"] = "Website"
    notes: list[LeadNoteIn] = Field(default_factory=list)


class DealIn(BaseModel):
    id: str = ""
    title: str
    contact_name: str = ""
    company: str = ""
    value: float = 0
    status: DealStatus = DealStatus.NEW
    close_date: str = ""


class DealStatusIn(BaseModel):
    status: DealStatus


class ContactIn(BaseModel):
    id: str = ""
    name: str
    company: str = ""
    phone: str = ""
    email: str = ""
    tags: list[str] = Field(default_factory=list)


def _store(request: Request) -> CRMStore:
    return request.app.state.store


@router.get("/dashboard")
async def dashboard(request: Request):
    store = _store(request)
    return {**store.summary(), "unread_notifications": store.unread_notifications}


@router.get("/leads")
async def list_leads(request: Request):
    return [asdict(l) for l in _store(request).leads]


@router.get("/leads/{lead_id}")
async def lead_detail(request: Request, lead_id: str):
    try:
        return asdict(_store(request).get_lead(lead_id))
    except KeyError:
        raise HTTPException(status_code=404, detail="Lead not found")


@router.post("/leads")
async def save_lead(request: Request, payload: LeadIn):
    data = payload.model_dump()
    notes = [LeadNote(**n) for n in data.pop("notes")]
    lead = _store(request).save_lead(Lead(**data, notes=notes))
    return asdict(lead)


@router.delete("/leads/{lead_id}")
async def delete_lead(request: Request, lead_id: str):
    try:
        _store(request).delete_lead(lead_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Lead not found")
    return Response(status_code=204)


@router.get("/deals")
async def list_deals(request: Request):
    return [asdict(d) for d in _store(request).deals]


@router.get("/contacts")
async def list_contacts(request: Request):
    return sorted((asdict(c) for c in _store(request).contacts), key=lambda c: c["name"])


@router.post("/deals")
async def save_deal(request: Request, payload: DealIn):
    return asdict(_store(request).save_deal(Deal(**payload.model_dump())))


@router.post("/deals/{deal_id}/status")
async def move_deal(request: Request, deal_id: str, payload: DealStatusIn):
    try:
        deal = _store(request).set_deal_status(deal_id, payload.status)
    except KeyError:
        raise HTTPException(status_code=404, detail="Deal not found")
    return asdict(deal)


@router.delete("/deals/{deal_id}")
async def delete_deal(request: Request, deal_id: str):
    try:
        _store(request).delete_deal(deal_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Deal not found")
    return Response(status_code=204)


@router.post("/contacts")
async def save_contact(request: Request, payload: ContactIn):
    return asdict(_store(request).save_contact(Contact(**payload.model_dump())))


@router.delete("/contacts/{contact_id}")
async def delete_contact(request: Request, contact_id: str):
    try:
        _store(request).delete_contact(contact_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Contact not found")
    return Response(status_code=204)


@router.get("/search")
async def search(request: Request, q: str = ""):
    return _store(request).search(q)
