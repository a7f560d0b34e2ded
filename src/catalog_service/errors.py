from typing import List, Optional


class CatalogError(Exception):
    status_code = 500


class ValidationError(CatalogError):
    status_code = 400

    def __init__(self, errors: List[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class NotFound(CatalogError):
    status_code = 404

    def __init__(self, product_id: Optional[str] = None) -> None:
        super().__init__("Product not found.")
        self.product_id = product_id


class MalformedData(CatalogError):
    """The backing document exists but does not hold a products list."""


class IOFailure(CatalogError):
    """Reading or writing the backing document failed at the OS level."""
