from __future__ import annotations

from dataclasses import asdict
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel

from nexora.models import ReminderOffset, Task, TaskPriority
from nexora.store import CRMStore

router = APIRouter(prefix="/tasks", tags=["tasks"])


class TaskIn(BaseModel):
    id: str = ""
    title: str
    due_date: str
    due_time: Optional[str] = None
    completed: bool = False
    related_to: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    reminder: ReminderOffset = ReminderOffset.NONE


def _store(request: Request) -> CRMStore:
    return request.app.state.store


@router.get("")
async def list_tasks(
    request: Request,
    priority: Optional[TaskPriority] = None,
    search: str = "",
    sort: Literal["dueDate", "priority"] = "dueDate",
):
    rows = _store(request).list_tasks(priority=priority, search=search, sort=sort)
    return [asdict(t) for t in rows]


@router.post("")
async def save_task(request: Request, payload: TaskIn):
    task = _store(request).save_task(Task(**payload.model_dump()))
    return asdict(task)


@router.post("/{task_id}/toggle")
async def toggle_task(request: Request, task_id: str):
    try:
        task = _store(request).toggle_task(task_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Task not found")
    return asdict(task)


@router.delete("/{task_id}")
async def delete_task(request: Request, task_id: str):
    try:
        _store(request).delete_task(task_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Task not found")
    return Response(status_code=204)
