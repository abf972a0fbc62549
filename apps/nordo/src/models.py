from dataclasses import dataclass, replace
from enum import Enum, IntEnum


# ---------------------------------------------------------------------------
# Potatoes
# ---------------------------------------------------------------------------

@dataclass
class Potato:
    size: int
    oil_used: str | None = None
    boiled: bool = False
    fried: bool = False
    coated_in_maple_syrup: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "Potato":
        """
        Build a Potato from its JSON representation.

        Raises ValueError when the payload is not a well-formed potato.
        """
        if not isinstance(data, dict):
            raise ValueError("Potato must be a JSON object")

        size = data.get("size")
        # bool is an int subclass
        if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
            raise ValueError("Potato size must be a positive integer")

        oil_used = data.get("oil_used")
        if oil_used is not None and not isinstance(oil_used, str):
            raise ValueError("Potato oil_used must be a string or null")

        flags = {}
        for name in ("boiled", "fried", "coated_in_maple_syrup"):
            value = data.get(name, False)
            if not isinstance(value, bool):
                raise ValueError(f"Potato {name} must be a boolean")
            flags[name] = value

        return cls(size=size, oil_used=oil_used, **flags)

    def to_dict(self) -> dict:
        return {
            "size": self.size,
            "oil_used": self.oil_used,
            "boiled": self.boiled,
            "fried": self.fried,
            "coated_in_maple_syrup": self.coated_in_maple_syrup,
        }


def parse_batch(payload) -> list[Potato]:
    """Parse the `potatoes` list of a start-boiling request body."""
    if not isinstance(payload, dict) or not isinstance(payload.get("potatoes"), list):
        raise ValueError("Request body must contain a 'potatoes' list")
    return [Potato.from_dict(item) for item in payload["potatoes"]]


# ---------------------------------------------------------------------------
# Boiling
# ---------------------------------------------------------------------------

class SoftnessLevel(IntEnum):
    """How soft a boiling batch is, ordered from hardest to softest."""

    HardAsRock = 0
    StillFirm = 1
    StartingToSoften = 2
    ReasonablySoft = 3
    LikeButter = 4


class BatchState(Enum):
    """Non-error outcomes of status and collection requests that carry no batch."""

    IDLE = "idle"
    NOT_READY = "not ready"


@dataclass
class BoilSession:
    """
    The single in-flight boil. `started_at` and `batch` are either both set
    (active) or both None (idle).
    """

    started_at: float | None = None
    batch: list[Potato] | None = None

    @property
    def active(self) -> bool:
        return self.started_at is not None

    def copy(self) -> "BoilSession":
        if self.batch is None:
            return replace(self)
        return replace(self, batch=[replace(p) for p in self.batch])

    def clear(self) -> None:
        self.started_at = None
        self.batch = None
