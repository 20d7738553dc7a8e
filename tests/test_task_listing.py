import math

import pytest

from app.config import settings

def create(client, headers, **fields) -> dict:
    r = client.post("/api/tasks", json={"title": "task"} | fields, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["task"]

def list_tasks(client, headers, **params) -> dict:
    r = client.get("/api/tasks", params=params, headers=headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    return body

def test_empty_listing(client, alice):
    body = list_tasks(client, alice)
    assert body == {"success": True, "count": 0, "total": 0, "page": 1, "pages": 0, "tasks": []}

def test_default_order_is_newest_first(client, alice):
    ids = [create(client, alice, title=f"t{i}")["id"] for i in range(3)]

    body = list_tasks(client, alice)
    assert [t["id"] for t in body["tasks"]] == list(reversed(ids))
    assert body["count"] == 3
    assert body["page"] == 1
    assert body["pages"] == 1

def test_sort_by_title_ascending_and_descending(client, alice):
    for title in ("banana", "apple", "cherry"):
        create(client, alice, title=title)

    asc = list_tasks(client, alice, sortBy="title", sortOrder="asc")
    assert [t["title"] for t in asc["tasks"]] == ["apple", "banana", "cherry"]

    desc = list_tasks(client, alice, sortBy="title")
    assert [t["title"] for t in desc["tasks"]] == ["cherry", "banana", "apple"]

def test_second_page_of_twelve(client, alice):
    for i in range(12):
        create(client, alice, title=f"t{i:02d}")

    body = list_tasks(client, alice, page=2, limit=5)
    assert body["count"] == 5
    assert body["total"] == 12
    assert body["page"] == 2
    assert body["pages"] == 3

    last = list_tasks(client, alice, page=3, limit=5)
    assert last["count"] == 2

    beyond = list_tasks(client, alice, page=4, limit=5)
    assert beyond["count"] == 0
    assert beyond["total"] == 12

@pytest.mark.parametrize("limit", [1, 3, 4, 10])
def test_pages_cover_total_exactly_once(client, alice, limit):
    for i in range(7):
        create(client, alice, title=f"t{i}")

    first = list_tasks(client, alice, limit=limit)
    assert first["pages"] == math.ceil(7 / limit)

    seen = []
    for page in range(1, first["pages"] + 1):
        body = list_tasks(client, alice, page=page, limit=limit)
        seen.extend(t["id"] for t in body["tasks"])

    assert len(seen) == first["total"] == 7
    assert len(set(seen)) == 7

def test_pages_rounds_up(client, alice):
    for i in range(25):
        create(client, alice, title=f"t{i}")

    body = list_tasks(client, alice, limit=10)
    assert body["total"] == 25
    assert body["pages"] == 3
    assert body["count"] == 10

def test_filter_by_status_and_priority(client, alice):
    create(client, alice, title="a", status="pending", priority="high")
    create(client, alice, title="b", status="pending", priority="low")
    create(client, alice, title="c", status="completed", priority="high")
    create(client, alice, title="d", status="in-progress", priority="medium")

    assert {t["title"] for t in list_tasks(client, alice, status="pending")["tasks"]} == {"a", "b"}
    assert {t["title"] for t in list_tasks(client, alice, priority="high")["tasks"]} == {"a", "c"}
    assert {t["title"] for t in list_tasks(client, alice, status="in-progress")["tasks"]} == {"d"}

    both = list_tasks(client, alice, status="pending", priority="high")
    assert [t["title"] for t in both["tasks"]] == ["a"]
    assert both["total"] == 1

def test_search_is_case_insensitive_substring(client, alice):
    create(client, alice, title="Buy Milk")
    create(client, alice, title="errands", description="pick up MILKSHAKE")
    create(client, alice, title="Walk dog")

    body = list_tasks(client, alice, search="milk")
    assert {t["title"] for t in body["tasks"]} == {"Buy Milk", "errands"}
    assert body["total"] == 2

    assert list_tasks(client, alice, search="DOG")["total"] == 1
    assert list_tasks(client, alice, search="cat")["total"] == 0

def test_search_treats_wildcards_literally(client, alice):
    create(client, alice, title="100% done")
    create(client, alice, title="1000 done")
    create(client, alice, title="snake_case")
    create(client, alice, title="snakeXcase")

    assert [t["title"] for t in list_tasks(client, alice, search="0%")["tasks"]] == ["100% done"]
    assert [t["title"] for t in list_tasks(client, alice, search="e_c")["tasks"]] == ["snake_case"]

def test_search_combines_with_filters(client, alice):
    create(client, alice, title="milk run", status="completed")
    create(client, alice, title="more milk", status="pending")

    body = list_tasks(client, alice, search="milk", status="pending")
    assert [t["title"] for t in body["tasks"]] == ["more milk"]

def test_repeated_listing_is_stable(client, alice):
    for i in range(6):
        create(client, alice, title="same", status="pending" if i % 2 else "completed")

    params = {"sortBy": "title", "sortOrder": "asc", "page": 1, "limit": 4}
    first = list_tasks(client, alice, **params)
    second = list_tasks(client, alice, **params)
    assert [t["id"] for t in first["tasks"]] == [t["id"] for t in second["tasks"]]

@pytest.mark.parametrize(
    "params",
    [
        {"page": 0},
        {"page": -1},
        {"page": "abc"},
        {"page": 10**20},
        {"page": settings.max_page + 1},
        {"limit": 0},
        {"limit": -5},
        {"limit": "ten"},
        {"limit": 101},
        {"sortBy": "password"},
        {"sortOrder": "sideways"},
        {"status": "done"},
        {"priority": "urgent"},
    ],
)
def test_bad_query_params_rejected(client, alice, params):
    r = client.get("/api/tasks", params=params, headers=alice)
    assert r.status_code == 422, r.text
    assert r.json()["success"] is False
    assert r.json()["message"] == "Validation error"

def test_trailing_slash_served_without_redirect(client, alice):
    r = client.post("/api/tasks/", json={"title": "slash"}, headers=alice, follow_redirects=False)
    assert r.status_code == 201, r.text

    r = client.get("/api/tasks/", headers=alice, follow_redirects=False)
    assert r.status_code == 200, r.text
    assert r.json()["total"] == 1

@pytest.mark.parametrize(
    "sort_by, expected_asc, expected_desc",
    [
        # tasks without a due date stay last either way
        ("dueDate", ["c", "a", "b"], ["a", "c", "b"]),
        ("updatedAt", ["b", "c", "a"], ["a", "c", "b"]),
        ("status", ["b", "c", "a"], ["a", "c", "b"]),
        ("priority", ["a", "c", "b"], ["b", "c", "a"]),
    ],
)
def test_sort_by_each_field(client, alice, sort_by, expected_asc, expected_desc):
    a = create(client, alice, title="a", dueDate="2030-01-01T00:00:00Z", status="completed", priority="low")
    create(client, alice, title="b", status="pending", priority="high")
    create(client, alice, title="c", dueDate="2029-01-01T00:00:00Z", status="in-progress", priority="medium")

    # touch a so it is the most recently updated
    r = client.put(f"/api/tasks/{a['id']}", json={"description": "touched"}, headers=alice)
    assert r.status_code == 200

    asc = list_tasks(client, alice, sortBy=sort_by, sortOrder="asc")
    assert [t["title"] for t in asc["tasks"]] == expected_asc

    desc = list_tasks(client, alice, sortBy=sort_by, sortOrder="desc")
    assert [t["title"] for t in desc["tasks"]] == expected_desc
