# src/taskdesk/helpers/display.py

"""
Enum value -> label / icon / CSS class.

Inputs may be enum members or raw strings from the server; every mapping has an
explicit catch-all arm (raw input for labels, a neutral class for colors).
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.models import CollaborationRole, TaskPriority, TaskStatus

NEUTRAL_TEXT = "text-gray-600"
NEUTRAL_BG = "bg-gray-500"
NEUTRAL_BADGE = "bg-gray-100 text-gray-600"


@dataclass(slots=True, frozen=True)
class StatusOption:
    value: TaskStatus
    label: str
    icon: str
    color: str


@dataclass(slots=True, frozen=True)
class PriorityOption:
    value: TaskPriority
    label: str
    color: str
    bg_color: str


@dataclass(slots=True, frozen=True)
class RoleOption:
    value: CollaborationRole
    label: str


# Choices for select inputs.
TASK_STATUS_OPTIONS: tuple[StatusOption, ...] = (
    StatusOption(TaskStatus.TODO, "Para Fazer", "Circle", "text-gray-500"),
    StatusOption(TaskStatus.IN_PROGRESS, "Em Progresso", "Clock", "text-blue-500"),
    StatusOption(TaskStatus.COMPLETED, "Concluída", "CheckCircle", "text-green-500"),
)

TASK_PRIORITY_OPTIONS: tuple[PriorityOption, ...] = (
    PriorityOption(TaskPriority.LOW, "Baixa", "text-green-500", "bg-green-500"),
    PriorityOption(TaskPriority.MEDIUM, "Média", "text-yellow-500", "bg-yellow-500"),
    PriorityOption(TaskPriority.HIGH, "Alta", "text-red-500", "bg-red-500"),
)

COLLABORATION_ROLE_OPTIONS: tuple[RoleOption, ...] = (
    RoleOption(CollaborationRole.OWNER, "Proprietário"),
    RoleOption(CollaborationRole.COLLABORATOR, "Colaborador"),
    RoleOption(CollaborationRole.VIEWER, "Visualizador"),
)


# ---- status ----


def status_label(status: TaskStatus | str) -> str:
    match status:
        case TaskStatus.TODO:
            return "A Fazer"
        case TaskStatus.IN_PROGRESS:
            return "Em Progresso"
        case TaskStatus.COMPLETED:
            return "Concluído"
        case _:
            return str(status)


def status_color(status: TaskStatus | str) -> str:
    match status:
        case TaskStatus.COMPLETED:
            return "text-green-600"
        case TaskStatus.IN_PROGRESS:
            return "text-blue-600"
        case TaskStatus.TODO:
            return "text-gray-600"
        case _:
            return NEUTRAL_TEXT


def status_icon(status: TaskStatus | str) -> str:
    match status:
        case TaskStatus.COMPLETED:
            return "CheckCircleIcon"
        case TaskStatus.IN_PROGRESS:
            return "ClockIcon"
        case TaskStatus.TODO:
            return "AlertCircleIcon"
        case _:
            return "AlertCircleIcon"


# ---- priority ----


def priority_label(priority: TaskPriority | str | None) -> str:
    if not priority:
        return "N/A"
    option = next((p for p in TASK_PRIORITY_OPTIONS if p.value == priority), None)
    return option.label if option is not None else "N/A"


def priority_color(priority: TaskPriority | str | None) -> str:
    match priority:
        case TaskPriority.HIGH:
            return "bg-red-500"
        case TaskPriority.MEDIUM:
            return "bg-yellow-500"
        case TaskPriority.LOW:
            return "bg-green-500"
        case _:
            return NEUTRAL_BG


# ---- collaboration role ----


def role_label(role: CollaborationRole | str) -> str:
    match role:
        case CollaborationRole.OWNER:
            return "Proprietário"
        case CollaborationRole.COLLABORATOR:
            return "Colaborador"
        case CollaborationRole.VIEWER:
            return "Visualizador"
        case _:
            return str(role)


def role_badge_class(role: CollaborationRole | str) -> str:
    match role:
        case CollaborationRole.OWNER:
            return "bg-purple-100 text-purple-700"
        case CollaborationRole.COLLABORATOR:
            return "bg-blue-100 text-blue-700"
        case CollaborationRole.VIEWER:
            return NEUTRAL_BADGE
        case _:
            return NEUTRAL_BADGE
