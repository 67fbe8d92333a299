from fastapi import Depends, HTTPException, Request

from focus.registry import SessionRegistry, SessionNotFoundError
from focus.session import PlayerSession

def get_registry(request: Request) -> SessionRegistry:
    """The registry shared with the terminal server."""
    return request.app.state.registry

def get_session(session_id: str, registry: SessionRegistry = Depends(get_registry)) -> PlayerSession:
    try:
        return registry.require(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
