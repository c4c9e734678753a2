# stockpile_api/client/forms.py
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Union

import httpx

from stockpile_api.client.api import ApiError
from stockpile_api.client.stockpiles import StockpileService

TEXT_FIELDS = ("name", "material", "grade")
DIMENSION_FIELDS = ("length", "width", "height", "volume")
COORDINATE_FIELDS = ("longitude", "latitude")
NUMERIC_FIELDS = DIMENSION_FIELDS + COORDINATE_FIELDS

CREATE_FAILED = "Failed to create stockpile"

# Inputs arrive as text from the UI as often as numbers
Number = Union[float, str, None]


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _number(value: Any) -> Optional[float]:
    """``float`` of a non-blank numeric input, ``None`` otherwise."""
    if _blank(value) or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass
class StockpileForm:
    """Input collected for a new stockpile, with the checks run before submitting."""

    name: str = ""
    material: str = ""
    grade: str = ""
    length: Number = None
    width: Number = None
    height: Number = None
    volume: Number = None
    longitude: Number = None
    latitude: Number = None

    error: str = field(default="", compare=False)
    loading: bool = field(default=False, compare=False)

    def errors(self) -> Dict[str, str]:
        problems = {}
        for name in TEXT_FIELDS + NUMERIC_FIELDS:
            if _blank(getattr(self, name)):
                problems[name] = "required"
        for name in NUMERIC_FIELDS:
            if name in problems:
                continue
            number = _number(getattr(self, name))
            if number is None:
                problems[name] = "must be a number"
            elif name in DIMENSION_FIELDS and number < 0:
                problems[name] = "must be zero or greater"
        return problems

    @property
    def is_valid(self) -> bool:
        return not self.errors()

    def calculate_volume(self) -> None:
        # Only when all three are set and non-zero; overwrites a manual volume
        length, width, height = (_number(getattr(self, name)) for name in ("length", "width", "height"))
        if length and width and height:
            self.volume = length * width * height

    def value(self) -> Dict[str, Any]:
        numbers = {name: _number(getattr(self, name)) for name in NUMERIC_FIELDS}
        return {
            "name": self.name,
            "material": self.material,
            "grade": self.grade,
            "length": numbers["length"],
            "width": numbers["width"],
            "height": numbers["height"],
            "volume": numbers["volume"],
            "location": {"type": "Point", "coordinates": [numbers["longitude"], numbers["latitude"]]},
        }

    def submit(self, service: StockpileService, navigate: Optional[Callable[[str], None]] = None) -> Optional[Dict[str, Any]]:
        if not self.is_valid:
            return None

        self.loading = True
        self.error = ""
        try:
            created = service.create_stockpile(self.value())
        except ApiError as exc:
            self.error = exc.message or CREATE_FAILED
            return None
        except httpx.RequestError:
            # Already logged by the client
            self.error = CREATE_FAILED
            return None
        finally:
            self.loading = False

        if navigate:
            navigate("/stockpiles")
        return created
