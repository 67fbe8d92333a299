from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List

class FocusEffect(BaseModel):
    id: str
    type: str
    severity: int
    duration: int
    start_time: float
    description: str

    model_config = ConfigDict(from_attributes=True)

class Stimulant(BaseModel):
    id: str
    name: str
    type: str
    focus_boost: int
    duration: int
    side_effects: List[str] = Field(default_factory=list)
    applied_at: float
    cost: int

    model_config = ConfigDict(from_attributes=True)

class FocusState(BaseModel):
    current: float
    maximum: float
    drain_rate: float
    regen_rate: float
    overload_threshold: float
    is_overloaded: bool
    last_action: float
    effects: List[FocusEffect] = Field(default_factory=list)
    stimulants: List[Stimulant] = Field(default_factory=list)
    percentage: Optional[float] = None
    status: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class CostContext(BaseModel):
    """Accepts the web client's camelCase keys as well as snake_case."""
    time_spent: Optional[float] = Field(default=None, alias="timeSpent", ge=0)
    difficulty: Optional[float] = Field(default=None, ge=0)
    pressure: Optional[float] = Field(default=None, ge=0)
    consecutive_actions: Optional[int] = Field(default=None, alias="consecutiveActions", ge=0)

    model_config = ConfigDict(populate_by_name=True)

class CommandRequest(BaseModel):
    command: str = Field(min_length=1, max_length=512)
    context: Optional[CostContext] = None

class ConsumeResponse(BaseModel):
    success: bool
    focus_used: int
    effects: List[FocusEffect] = Field(default_factory=list)
    message: Optional[str] = None
    overload_triggered: bool = False

    model_config = ConfigDict(from_attributes=True)

class CostResponse(BaseModel):
    command: str
    cost: int

class StimulantRequest(BaseModel):
    type: str

class StimulantResponse(BaseModel):
    success: bool
    message: str
    stimulant: Optional[Stimulant] = None

    model_config = ConfigDict(from_attributes=True)

class TypoRequest(BaseModel):
    command: str = Field(max_length=512)

class TypoResponse(BaseModel):
    command: str
    modified: str

class DelayResponse(BaseModel):
    delay_ms: int
