import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


NAME_ERROR = "Product name is required and must be a non-empty string."
PRICE_ERROR = "Product price must be a non-negative number."
BODY_ERROR = "Request body must be a JSON object."

Number = Union[int, float]

_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


@dataclass
class ProductInput:
    name: Optional[str] = None
    price: Optional[Number] = None

    def changes(self) -> Dict[str, Any]:
        """Only the fields that were supplied, ready to merge into a record."""
        out: Dict[str, Any] = {}
        if self.name is not None:
            out["name"] = self.name
        if self.price is not None:
            out["price"] = self.price
        return out


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    sanitized: ProductInput = field(default_factory=ProductInput)

    @property
    def ok(self) -> bool:
        return not self.errors


def coerce_price(value: Any) -> Optional[Number]:
    """Numeric view of ``value``, or None when it is not a usable price."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not _DECIMAL.fullmatch(text):
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if isinstance(number, float) and not math.isfinite(number):
        return None
    if number < 0:
        return None
    return number


def _clean_name(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    name = value.strip()
    return name or None


def validate_product_input(payload: Any, partial: bool = False) -> ValidationResult:
    if not isinstance(payload, dict):
        return ValidationResult(errors=[BODY_ERROR])

    result = ValidationResult()

    if not partial or "name" in payload:
        name = _clean_name(payload.get("name"))
        if name is None:
            result.errors.append(NAME_ERROR)
        else:
            result.sanitized.name = name

    if not partial or "price" in payload:
        price = coerce_price(payload.get("price"))
        if price is None:
            result.errors.append(PRICE_ERROR)
        else:
            result.sanitized.price = price

    return result
