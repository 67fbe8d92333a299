from fastapi import APIRouter, Depends, HTTPException
from typing import List

from focus.registry import SessionRegistry
from focus.session import PlayerSession
from ..dependencies import get_registry, get_session
from ..models.session import SessionCreate, SessionSummary

router = APIRouter(prefix="/sessions", tags=["sessions"])

@router.get("/", response_model=List[SessionSummary])
async def list_sessions(registry: SessionRegistry = Depends(get_registry)):
    """Get every live session"""
    return [session.summary() for session in registry.list_sessions()]

@router.post("/", response_model=SessionSummary, status_code=201)
async def create_session(payload: SessionCreate, registry: SessionRegistry = Depends(get_registry)):
    """Open a session with a fresh focus engine"""
    if registry.find_by_handle(payload.handle):
        raise HTTPException(status_code=409, detail="Handle already in use")
    session = registry.create_session(payload.handle)
    return session.summary()

@router.get("/{session_id}", response_model=SessionSummary)
async def get_session_summary(session: PlayerSession = Depends(get_session)):
    """Get a specific session by ID"""
    return session.summary()

@router.delete("/{session_id}", status_code=204)
async def delete_session(session: PlayerSession = Depends(get_session),
                         registry: SessionRegistry = Depends(get_registry)):
    """Close a session and stop its engine"""
    registry.remove_session(session.id)
