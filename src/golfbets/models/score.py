from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Score:
    """Gross strokes recorded by one player on one hole."""
    player_id: str
    hole_number: int
    strokes: int

    @property
    def key(self) -> tuple[str, int]:
        return (self.player_id, self.hole_number)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Score":
        return cls(
            player_id=str(data["player_id"]),
            hole_number=int(data["hole_number"]),
            strokes=data["strokes"],
        )
