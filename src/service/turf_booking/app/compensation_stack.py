"""
Compensation stack for multi-step writes without a spanning transaction.

Each successful step pushes an undo action. On failure ``unwind`` runs the
actions newest first. A failing undo is logged and skipped so that the
remaining undos still run; the slots it leaves behind are picked up by the
orphaned-reservation reconcile pass.
"""

from typing import Awaitable, Callable, List

import attrs

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics


UndoAction = Callable[[], Awaitable[object]]


@attrs.define(frozen=True)
class _Compensation:
    description: str
    operation: str
    undo: UndoAction


class CompensationStack:
    def __init__(self) -> None:
        self._actions: List[_Compensation] = []

    def __len__(self) -> int:
        return len(self._actions)

    def push(self, *, description: str, operation: str, undo: UndoAction) -> None:
        self._actions.append(_Compensation(description=description, operation=operation, undo=undo))

    def discard(self) -> None:
        """Forget all actions once the whole operation has succeeded"""
        self._actions.clear()

    async def unwind(self) -> List[str]:
        """
        Run every undo action in reverse push order

        Returns:
            Descriptions of the actions that failed
        """
        failed: List[str] = []
        while self._actions:
            action = self._actions.pop()
            try:
                await action.undo()
            except Exception as e:
                failed.append(action.description)
                metrics.record_compensation_failure(operation=action.operation)
                Logger.base.error(
                    f'❌ [COMPENSATE] {action.description} failed: {type(e).__name__}: {e}'
                )
            else:
                Logger.base.info(f'↩️ [COMPENSATE] {action.description}')
        return failed
