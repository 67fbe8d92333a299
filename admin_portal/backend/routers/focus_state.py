from fastapi import APIRouter, Depends
from typing import List

from focus.session import PlayerSession
from ..dependencies import get_session
from ..models.focus import (
    FocusState, FocusEffect, CommandRequest, ConsumeResponse, CostResponse,
    StimulantRequest, StimulantResponse, TypoRequest, TypoResponse, DelayResponse,
)

router = APIRouter(prefix="/sessions/{session_id}", tags=["focus"])

def _context(payload: CommandRequest):
    if payload.context is None:
        return None
    return payload.context.model_dump(exclude_none=True)

@router.get("/state", response_model=FocusState)
async def get_state(session: PlayerSession = Depends(get_session)):
    """Current focus state, with expired effects and stimulants swept"""
    engine = session.engine
    state = FocusState.model_validate(engine.get_state())
    state.percentage = engine.get_focus_percentage()
    state.status = engine.focus_status()
    return state

@router.get("/effects", response_model=List[FocusEffect])
async def get_effects(session: PlayerSession = Depends(get_session)):
    """Active effects only"""
    return [FocusEffect.model_validate(e) for e in session.engine.get_active_effects()]

@router.get("/delay", response_model=DelayResponse)
async def get_delay(session: PlayerSession = Depends(get_session)):
    """How long the client should hold command output back"""
    return DelayResponse(delay_ms=session.engine.get_command_delay())

@router.post("/cost", response_model=CostResponse)
async def quote_cost(payload: CommandRequest, session: PlayerSession = Depends(get_session)):
    """Price a command without spending focus"""
    cost = session.engine.calculate_focus_cost(payload.command, _context(payload))
    return CostResponse(command=payload.command, cost=cost)

@router.post("/consume", response_model=ConsumeResponse)
async def consume(payload: CommandRequest, session: PlayerSession = Depends(get_session)):
    """Spend focus for a command the client is executing"""
    result = session.engine.consume_focus(payload.command, _context(payload))
    session.commands_issued += 1
    session.remember(payload.command)
    return ConsumeResponse.model_validate(result)

@router.post("/stimulants", response_model=StimulantResponse)
async def use_stimulant(payload: StimulantRequest, session: PlayerSession = Depends(get_session)):
    """Apply a stimulant. Overdose and unknown types come back as success=false"""
    result = session.engine.use_stimulant(payload.type)
    return StimulantResponse.model_validate(result)

@router.post("/typos", response_model=TypoResponse)
async def apply_typos(payload: TypoRequest, session: PlayerSession = Depends(get_session)):
    """Run a command string through active typo effects"""
    return TypoResponse(command=payload.command, modified=session.engine.apply_command_effects(payload.command))

@router.post("/reset", response_model=FocusState)
async def reset(session: PlayerSession = Depends(get_session)):
    """Restore a full, clean focus pool"""
    session.engine.reset_focus()
    return await get_state(session)
