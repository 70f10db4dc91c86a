"""Task use cases."""

from taskdesk.application.use_cases.tasks.task_operations import TaskService, to_entity

__all__ = ["TaskService", "to_entity"]
