"""Diff API endpoints"""

from __future__ import annotations

from fastapi import APIRouter

from models.diff import DiffRequest, DiffResponse
from services.diff_engine import compute_diff, render_unified, summarize_diff

router = APIRouter()


@router.post("", response_model=DiffResponse)
async def diff_texts(request: DiffRequest) -> DiffResponse:
    """Compute a line diff between two texts"""
    lines = compute_diff(request.old_text, request.new_text)
    return DiffResponse(
        lines=lines,
        stats=summarize_diff(lines),
        unified=render_unified(lines),
    )
