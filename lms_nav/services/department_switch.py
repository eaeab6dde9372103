# lms_nav/services/department_switch.py

import asyncio
from typing import Awaitable, Callable, List, Optional, Union

from loguru import logger

from lms_nav.core.config import settings
from lms_nav.models.switch_state import (
    DepartmentSwitchState,
    SwitchError,
    SwitchIdle,
    Switching,
    SwitchResult,
)
from lms_nav.services.department_selection import DepartmentSelectionStore

# Resolves to None on success, or to an error message on failure. Raising
# counts as a failure too.
SwitchCollaborator = Callable[[str], Awaitable[Union[None, str]]]
Listener = Callable[["DepartmentSwitchController"], None]

_UNSET = object()


class DepartmentSwitchBusyError(RuntimeError):
    """A switch to another department is still in flight."""

    def __init__(self, in_flight: str, requested: Optional[str]):
        self.in_flight = in_flight
        self.requested = requested
        super().__init__(
            f"Cannot switch to {requested or 'no department'} while switching to {in_flight}"
        )


class DepartmentSwitchController:
    """
    Owns the committed active department and the switch state machine.

    Idle --request--> Switching(target) --success--> Idle (target committed)
                                        --failure--> Error(target, message)

    A repeat request for the in-flight target joins the running call. Any
    other request while switching raises DepartmentSwitchBusyError.
    Re-selecting the active department (or passing None) deselects locally.
    After close(), outcomes of calls still in flight are dropped.
    """

    def __init__(
        self,
        switch_department: SwitchCollaborator,
        store: DepartmentSelectionStore,
        user_id: str,
        active_department_id: Optional[str] = None,
    ):
        self._switch_department = switch_department
        self._store = store
        self.user_id = user_id

        self._active_department_id = active_department_id
        self._state: DepartmentSwitchState = SwitchIdle()
        self._in_flight: Optional[asyncio.Future] = None
        self._listeners: List[Listener] = []
        self._closed = False

    # ------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------
    @property
    def state(self) -> DepartmentSwitchState:
        return self._state

    @property
    def active_department_id(self) -> Optional[str]:
        """Last committed department. Never the target of an in-flight switch."""
        return self._active_department_id

    @property
    def is_switching(self) -> bool:
        return isinstance(self._state, Switching)

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------
    async def request_switch(self, department_id: Optional[str]) -> SwitchResult:
        in_flight = self._in_flight
        if isinstance(self._state, Switching) and in_flight is not None:
            if department_id == self._state.target_id:
                logger.debug(f"Joining in-flight switch to {department_id} for user {self.user_id}")
                return await asyncio.shield(in_flight)
            raise DepartmentSwitchBusyError(self._state.target_id, department_id)

        if department_id is None or department_id == self._active_department_id:
            self._deselect()
            return SwitchResult.success(None)

        logger.info(f"Switching user {self.user_id} to department {department_id}")
        self._set(state=Switching(target_id=department_id))
        in_flight = self._in_flight = asyncio.ensure_future(self._run_switch(department_id))
        self._notify()
        return await asyncio.shield(in_flight)

    def restore(self, department_id: str) -> None:
        """Commit a remembered selection locally, without a switch call."""
        self._ensure_not_switching(department_id)
        logger.info(f"Restoring department {department_id} for user {self.user_id}")
        self._set(state=SwitchIdle(), active=department_id)
        self._notify()

    def clear(self) -> None:
        """Drop the selection and any error, e.g. on logout."""
        self._ensure_not_switching(None)
        self._set(state=SwitchIdle(), active=None)
        self._notify()

    def dismiss_error(self) -> None:
        if isinstance(self._state, SwitchError):
            self._set(state=SwitchIdle())
            self._notify()

    def close(self) -> None:
        """Tear down: results of switches still in flight are not applied."""
        self._closed = True
        self._listeners.clear()

    # ------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------
    async def _run_switch(self, department_id: str) -> SwitchResult:
        try:
            outcome = await self._switch_department(department_id)
        except Exception as e:
            result = SwitchResult.failure(department_id, str(e) or settings.SWITCH_ERROR_MESSAGE)
        except BaseException:
            # Cancellation still propagates, but the controller must leave Switching.
            self._finish(SwitchResult.failure(department_id, settings.SWITCH_ERROR_MESSAGE))
            raise
        else:
            result = self._to_result(department_id, outcome)

        self._finish(result)
        return result

    def _finish(self, result: SwitchResult) -> None:
        department_id = result.department_id
        self._in_flight = None

        if self._closed:
            logger.debug(f"Controller closed; dropping switch outcome for {department_id}")
            return

        if result.ok:
            self._set(state=SwitchIdle(), active=department_id)
            self._remember(department_id)
            logger.info(f"User {self.user_id} now working in department {department_id}")
        else:
            self._set(state=SwitchError(target_id=department_id, message=result.error))
            logger.warning(f"Department switch to {department_id} failed: {result.error}")

        self._notify()

    @staticmethod
    def _to_result(department_id: str, outcome) -> SwitchResult:
        if outcome is None or outcome is True:
            return SwitchResult.success(department_id)
        if isinstance(outcome, str) and outcome:
            return SwitchResult.failure(department_id, outcome)
        return SwitchResult.failure(department_id, settings.SWITCH_ERROR_MESSAGE)

    def _remember(self, department_id: str) -> None:
        try:
            self._store.set(self.user_id, department_id)
        except Exception:
            # The switch is already committed server-side; only the
            # "last department" hint is lost.
            logger.exception(f"Could not remember department {department_id} for user {self.user_id}")

    def _deselect(self) -> None:
        logger.info(f"User {self.user_id} cleared department selection")
        self._set(state=SwitchIdle(), active=None)
        self._notify()

    def _ensure_not_switching(self, requested: Optional[str]) -> None:
        if isinstance(self._state, Switching) and self._in_flight is not None:
            raise DepartmentSwitchBusyError(self._state.target_id, requested)

    def _set(self, state: DepartmentSwitchState, active=_UNSET) -> None:
        self._state = state
        if active is not _UNSET:
            self._active_department_id = active

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception(f"Switch state listener failed for user {self.user_id}")
