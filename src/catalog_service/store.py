import json
import logging
import os
import uuid
from threading import Lock
from typing import Any, Dict, List

from .errors import IOFailure, MalformedData, NotFound


logger = logging.getLogger(__name__)

Product = Dict[str, Any]
Document = Dict[str, Any]

_MUTABLE_FIELDS = ("name", "price")


def _empty_document() -> Document:
    return {"products": []}


class JsonFileStore:
    """Product catalog kept in a single JSON document on disk.

    Every public catalog operation is one full cycle: the document is read,
    changed in memory and, for mutations, written back whole. Cycles inside
    one process are serialized; separate processes sharing the file are not.
    """

    def __init__(self, path: str) -> None:
        self.path = os.path.abspath(path)
        self._lock = Lock()

    def load(self) -> Document:
        try:
            with open(self.path, encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            return self._initialize()
        except UnicodeDecodeError as exc:
            raise MalformedData(f"{self.path} is not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise IOFailure(f"could not read {self.path}: {exc}") from exc

        try:
            document = json.loads(raw)
        except ValueError as exc:
            raise MalformedData(f"{self.path} is not valid JSON: {exc}") from exc
        if not isinstance(document, dict) or not isinstance(document.get("products"), list):
            raise MalformedData("Malformed data file: products must be an array")
        if not all(isinstance(item, dict) for item in document["products"]):
            raise MalformedData("Malformed data file: every product must be an object")
        return document

    def save(self, document: Document) -> None:
        payload = json.dumps(document, indent=2, ensure_ascii=False) + "\n"
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(payload)
        except OSError as exc:
            raise IOFailure(f"could not write {self.path}: {exc}") from exc
        logger.debug("wrote %d products to %s", len(document.get("products", [])), self.path)

    def _initialize(self) -> Document:
        document = _empty_document()
        payload = json.dumps(document, indent=2) + "\n"
        try:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            # "x" refuses to overwrite a file created since the failed read.
            with open(self.path, "x", encoding="utf-8") as f:
                f.write(payload)
        except FileExistsError:
            return self.load()
        except OSError as exc:
            raise IOFailure(f"could not create {self.path}: {exc}") from exc
        logger.info("initialized empty catalog at %s", self.path)
        return document

    @staticmethod
    def _index_of(products: List[Product], product_id: str) -> int:
        for i, item in enumerate(products):
            if item.get("id") == product_id:
                return i
        raise NotFound(product_id)

    def list_products(self) -> List[Product]:
        with self._lock:
            return self.load()["products"]

    def get_product(self, product_id: str) -> Product:
        with self._lock:
            products = self.load()["products"]
            return products[self._index_of(products, product_id)]

    def create_product(self, name: str, price: float) -> Product:
        with self._lock:
            document = self.load()
            product = {"id": str(uuid.uuid4()), "name": name, "price": price}
            document["products"].append(product)
            self.save(document)
            return product

    def update_product(self, product_id: str, changes: Dict[str, Any]) -> Product:
        with self._lock:
            document = self.load()
            products = document["products"]
            index = self._index_of(products, product_id)
            updates = {k: v for k, v in changes.items() if k in _MUTABLE_FIELDS}
            products[index] = {**products[index], **updates}
            self.save(document)
            return products[index]

    def delete_product(self, product_id: str) -> Product:
        with self._lock:
            document = self.load()
            products = document["products"]
            deleted = products.pop(self._index_of(products, product_id))
            self.save(document)
            return deleted
