# focus/models.py
"""
Data structures shared by the focus engine, the terminal and the HTTP API.
All timestamps and durations are in milliseconds.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Mapping, Any, Union

@dataclass
class FocusEffect:
    """A timed debuff degrading the player's terminal experience."""
    id: str
    type: str
    severity: int
    duration: int
    start_time: float
    description: str

    def is_active(self, now: float) -> bool:
        return now - self.start_time < self.duration

    def remaining_ms(self, now: float) -> float:
        return max(0.0, self.duration - (now - self.start_time))

@dataclass
class Stimulant:
    """A timed buff that restored focus when applied."""
    id: str
    name: str
    type: str
    focus_boost: int
    duration: int
    side_effects: List[str]
    applied_at: float
    cost: int

    def is_active(self, now: float) -> bool:
        return now - self.applied_at < self.duration

    def remaining_ms(self, now: float) -> float:
        return max(0.0, self.duration - (now - self.applied_at))

@dataclass(frozen=True)
class FocusAction:
    """Static cost profile for a terminal command."""
    command: str
    base_cost: int
    complexity: int
    stress_level: int

@dataclass
class FocusState:
    """The mutable focus pool of a single player session."""
    current: float
    maximum: float
    drain_rate: float
    regen_rate: float
    overload_threshold: float
    is_overloaded: bool
    last_action: float
    effects: List[FocusEffect] = field(default_factory=list)
    stimulants: List[Stimulant] = field(default_factory=list)

    @property
    def efficiency(self) -> float:
        return self.current / self.maximum if self.maximum else 0.0

@dataclass
class CostContext:
    """Optional situational modifiers applied to a command's focus cost."""
    time_spent: Optional[float] = None
    difficulty: Optional[float] = None
    pressure: Optional[float] = None
    consecutive_actions: Optional[int] = None

    # The web client sends camelCase keys
    _ALIASES = {
        "timeSpent": "time_spent",
        "consecutiveActions": "consecutive_actions",
    }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CostContext":
        """Builds a context from a dict, accepting snake_case or camelCase keys."""
        values = {}
        for key, value in data.items():
            name = cls._ALIASES.get(key, key)
            if name in ("time_spent", "difficulty", "pressure", "consecutive_actions"):
                values[name] = value
        return cls(**values)

ContextLike = Union[CostContext, Mapping[str, Any], None]

@dataclass
class ConsumeResult:
    """A structured result for a focus consumption."""
    success: bool
    focus_used: int
    effects: List[FocusEffect]
    message: Optional[str] = None
    overload_triggered: bool = False

@dataclass
class StimulantResult:
    """A structured result for a stimulant application."""
    success: bool
    message: str
    stimulant: Optional[Stimulant] = None
