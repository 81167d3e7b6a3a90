from dataclasses import dataclass

@dataclass(slots=True)
class ScoreBoard:
    """Running score for the session; persistence belongs to the caller."""
    total: int = 0
    last_delta: int = 0
    matches: int = 0
