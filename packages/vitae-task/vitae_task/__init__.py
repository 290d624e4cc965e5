"""vitae-task - Timed, immediate, and perpetual tasks with milestones."""
from vitae_task.catalog import TaskCatalog
from vitae_task.manager import TaskManager
from vitae_task.milestones import (
    Milestone,
    MilestoneError,
    MilestoneField,
    MilestoneOp,
    apply_milestone,
    parse_milestone,
    parse_milestone_table,
)
from vitae_task.systems import make_task_system
from vitae_task.types import RunState, TaskDef, TaskParams, TaskState

__all__ = [
    "Milestone",
    "MilestoneError",
    "MilestoneField",
    "MilestoneOp",
    "RunState",
    "TaskCatalog",
    "TaskDef",
    "TaskManager",
    "TaskParams",
    "TaskState",
    "apply_milestone",
    "make_task_system",
    "parse_milestone",
    "parse_milestone_table",
]
