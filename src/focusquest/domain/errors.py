from __future__ import annotations


class FocusQuestError(Exception):
    """Base class for errors raised by the focusquest core."""


class ContentConfigurationError(FocusQuestError, ValueError):
    """Static content is missing a required field or names something unknown."""


class ChestAlreadyOpenedError(FocusQuestError, RuntimeError):
    def __init__(self, chest_id: str) -> None:
        super().__init__(f"Chest has already been opened: {chest_id}")
        self.chest_id = chest_id


class TaskAlreadyActiveError(FocusQuestError, RuntimeError):
    def __init__(self, active_task_type: str) -> None:
        super().__init__(f"A {active_task_type} task is already active; complete or cancel it first.")
        self.active_task_type = active_task_type
