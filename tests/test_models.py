# tests/test_models.py

from __future__ import annotations

from taskdesk.core.models import (
    ApiResponse,
    AuthResponse,
    CategoryUpdate,
    CollaborationRole,
    CreateTaskData,
    Task,
    TaskPriority,
    TaskStatus,
    UpdateTaskData,
    list_of,
)

from .fakes import category_payload, task_payload, user_payload


def test_task_from_api_with_relations() -> None:
    raw = task_payload(
        "t1",
        status="IN_PROGRESS",
        priority="HIGH",
        due_date="2024-03-05",
        category=category_payload(),
        assignedUser=user_payload("u2", name="Bruno"),
        collaborations=[
            {"id": "k1", "taskId": "t1", "userId": "u2", "role": "VIEWER", "createdAt": "x"},
            {"id": "k2", "taskId": "other", "userId": "u3", "role": "OWNER", "createdAt": "x"},
        ],
    )

    task = Task.from_api(raw)

    assert task.status is TaskStatus.IN_PROGRESS
    assert task.priority is TaskPriority.HIGH
    assert task.due_date == "2024-03-05"
    assert task.category is not None and task.category.name == "Work"
    assert task.assigned_user is not None and task.assigned_user.name == "Bruno"
    assert task.created_by is None
    assert task.collaborations is not None
    assert [c.id for c in task.collaborations] == ["k1"]
    assert task.collaborations[0].role is CollaborationRole.VIEWER


def test_unknown_status_is_coerced_to_todo() -> None:
    task = Task.from_api(task_payload("t1", status="ARCHIVED"))
    assert task.status is TaskStatus.TODO


def test_envelope_parse() -> None:
    resp = ApiResponse.parse(
        {"success": True, "message": "ok", "data": [task_payload("a"), task_payload("b")]},
        list_of(Task.from_api),
    )
    assert resp.success is True
    assert [t.id for t in resp.data or []] == ["a", "b"]

    failed = ApiResponse.parse({"success": False, "message": "nope", "data": None}, list_of(Task.from_api))
    assert failed.success is False
    assert failed.message == "nope"
    assert failed.data is None

    assert ApiResponse.parse(None).success is False


def test_auth_response() -> None:
    resp = AuthResponse.from_api({"success": True, "message": "", "token": "abc", "user": user_payload()})
    assert resp.token == "abc"
    assert resp.user is not None and resp.user.id == "u1"

    assert AuthResponse.from_api({"success": False, "message": "bad", "token": ""}).token is None


def test_request_payloads_drop_unset_fields() -> None:
    assert UpdateTaskData(status=TaskStatus.COMPLETED).to_api() == {"status": "COMPLETED"}
    assert CategoryUpdate(color="#000").to_api() == {"color": "#000"}
    assert CreateTaskData(title="x", priority=TaskPriority.LOW, assigned_user_id="u1").to_api() == {
        "title": "x",
        "priority": "LOW",
        "assignedUserId": "u1",
    }
