import random
import string
from threading import Lock
from locust import HttpUser, task, between


_known_lock = Lock()
_known = []


def _product_name() -> str:
    return "item " + "".join(random.choice(string.ascii_lowercase) for _ in range(6))


def _remember(pid: str) -> None:
    with _known_lock:
        _known.append(pid)


def _forget(pid: str) -> None:
    with _known_lock:
        if pid in _known:
            _known.remove(pid)


def _pick() -> "str | None":
    with _known_lock:
        return random.choice(_known) if _known else None


class CatalogUser(HttpUser):
    """Drives every catalog route, including the ones expected to reject input."""

    wait_time = between(0.05, 0.15)

    def on_start(self):
        # prices as strings exercise server-side coercion
        r = self.client.post("/products", json={"name": _product_name(), "price": "9.99"}, name="POST /products")
        if r.status_code == 201:
            _remember(r.json()["id"])

    @task(6)
    def browse(self):
        self.client.get("/products", name="GET /products")

    @task(3)
    def add_product(self):
        payload = {"name": f"  {_product_name()}  ", "price": round(random.uniform(0, 250), 2)}
        with self.client.post("/products", json=payload, name="POST /products", catch_response=True) as r:
            if r.status_code != 201:
                r.failure(f"create returned {r.status_code}")
                return
            body = r.json()
            if body["name"] != payload["name"].strip():
                r.failure("name was not trimmed")
                return
            _remember(body["id"])

    @task(2)
    def view_product(self):
        pid = _pick()
        if pid is None:
            return
        with self.client.get(f"/products/{pid}", name="GET /products/:id", catch_response=True) as r:
            if r.status_code == 404:
                r.success()
                _forget(pid)

    @task(2)
    def reprice(self):
        pid = _pick()
        if pid is None:
            return
        with self.client.put(f"/products/{pid}", json={"price": random.randint(1, 500)},
                             name="PUT /products/:id price", catch_response=True) as r:
            if r.status_code == 404:
                r.success()
                _forget(pid)

    @task(1)
    def rename(self):
        pid = _pick()
        if pid is None:
            return
        with self.client.put(f"/products/{pid}", json={"name": _product_name()},
                             name="PUT /products/:id name", catch_response=True) as r:
            if r.status_code == 404:
                r.success()
                _forget(pid)

    @task(1)
    def rejected_writes(self):
        cases = [
            ("post", "/products", {"name": "   ", "price": -1}),
            ("post", "/products", {"name": "pen", "price": "1_000"}),
            ("put", f"/products/{_pick() or 'none'}", {"price": "free"}),
        ]
        method, path, payload = random.choice(cases)
        label = "POST /products (invalid)" if method == "post" else "PUT /products/:id (invalid)"
        with self.client.request(method.upper(), path, json=payload, name=label, catch_response=True) as r:
            if r.status_code == 400 and r.json().get("errors"):
                r.success()
            else:
                r.failure(f"expected 400 with errors, got {r.status_code}")

    @task(1)
    def remove(self):
        pid = _pick()
        if pid is None:
            return
        with self.client.delete(f"/products/{pid}", name="DELETE /products/:id", catch_response=True) as r:
            # another user may have removed it first
            if r.status_code in (200, 404):
                r.success()
        _forget(pid)
