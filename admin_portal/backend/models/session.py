from pydantic import BaseModel, Field

class SessionCreate(BaseModel):
    handle: str = Field(min_length=1, max_length=24, pattern=r"^[A-Za-z0-9_-]+$")

class SessionSummary(BaseModel):
    id: str
    handle: str
    credits: int
    focus: float
    status: str
    is_overloaded: bool
    active_effects: int
    active_stimulants: int
    commands_issued: int
    connected: bool
