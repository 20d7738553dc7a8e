from __future__ import annotations

import os
import time
import uuid

import requests
from rich import print

BASE = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")

def _headers(jwt: str | None) -> dict[str, str]:
    headers = {"content-type": "application/json"}
    if jwt:
        headers["authorization"] = f"bearer {jwt}"
    return headers

def post(path: str, *, jwt: str | None = None, json: dict | None = None) -> requests.Response:
    return requests.post(f"{BASE}{path}", headers=_headers(jwt), json=json, timeout=10)

def get(path: str, *, jwt: str | None = None, params: dict | None = None) -> requests.Response:
    return requests.get(f"{BASE}{path}", headers=_headers(jwt), params=params, timeout=10)

def register(name: str, email: str, password: str) -> str:
    r = post("/api/auth/register", json={"name": name, "email": email, "password": password})
    r.raise_for_status()
    return r.json()["token"]

def wait_ready(timeout_s: float = 30.0) -> None:
    deadline = time.time() + timeout_s
    last_err: Exception | None = None

    while time.time() < deadline:
        try:
            r = get("/api/ready")
            if r.status_code == 200:
                return
        except requests.RequestException as e:
            last_err = e
        time.sleep(0.5)

    if last_err:
        raise RuntimeError(f"api not ready after {timeout_s}s (last error: {last_err})")
    raise RuntimeError(f"api not ready after {timeout_s}s")

def main() -> None:
    print("[bold]demo: register -> create tasks -> filter/search/page -> stats -> isolation[/bold]")

    wait_ready()
    print("[green]ready ok[/green]")

    suffix = uuid.uuid4().hex[:8]
    alice = register("alice", f"alice+{suffix}@example.com", "secret123")
    bob = register("bob", f"bob+{suffix}@example.com", "secret123")
    print("registered alice + bob")

    task_ids = []
    for i, (status, priority) in enumerate(
        [("pending", "high"), ("pending", "low"), ("completed", "medium"), ("in-progress", "high")]
    ):
        r = post(
            "/api/tasks",
            jwt=alice,
            json={"title": f"demo task {i}", "description": "Buy Milk" if i == 1 else None,
                  "status": status, "priority": priority},
        )
        r.raise_for_status()
        task_ids.append(r.json()["task"]["id"])
    print("created tasks:", len(task_ids))

    r = get("/api/tasks", jwt=alice, params={"status": "pending", "sortBy": "title", "sortOrder": "asc"})
    r.raise_for_status()
    print("pending tasks:", [t["title"] for t in r.json()["tasks"]])

    r = get("/api/tasks", jwt=alice, params={"search": "milk"})
    r.raise_for_status()
    print("search 'milk':", r.json()["count"])

    r = get("/api/tasks", jwt=alice, params={"page": 2, "limit": 3})
    r.raise_for_status()
    body = r.json()
    print(f"page {body['page']}/{body['pages']}: {body['count']} of {body['total']}")

    r = get("/api/tasks/stats", jwt=alice)
    r.raise_for_status()
    print("stats:", r.json()["stats"])

    r = get(f"/api/tasks/{task_ids[0]}", jwt=bob)
    print("bob reads alice's task ->", r.status_code)
    print("[bold green]demo complete[/bold green]")

if __name__ == "__main__":
    main()
