"""Lifecycle management base class for timer-driven components

Components that own a periodic callback (progress polling, capture) start and
stop through this class so that every transition is logged the same way and
a failing start never leaves a half-running timer behind.
"""

from abc import ABC, abstractmethod
from enum import Enum

from ...utils import app_logger


class ComponentState(Enum):
    """Simple 3-state component lifecycle"""

    STOPPED = "stopped"  # Component is stopped (initial state)
    RUNNING = "running"  # Component is actively running
    ERROR = "error"  # Component encountered an error


class LifecycleComponent(ABC):
    """Base class for components with start/stop semantics

    Usage:
        class Poller(LifecycleComponent):
            def __init__(self, scheduler):
                super().__init__("Poller")
                self._task = scheduler.create_repeating_task(100, self._poll)

            def _do_start(self) -> bool:
                self._task.start()
                return True

            def _do_stop(self) -> bool:
                self._task.cancel()
                return True

    A component may also stop itself from inside its own callback with
    ``_mark_stopped()``; ``start()`` then works again without an explicit stop.
    """

    def __init__(self, component_name: str):
        """Initialize lifecycle component

        Args:
            component_name: Name for logging and identification
        """
        self._component_name = component_name
        self._state = ComponentState.STOPPED

    def start(self) -> bool:
        """Start the component

        Returns:
            True if start successful, False otherwise
        """
        if self._state == ComponentState.RUNNING:
            return True

        # 先置为 RUNNING：_do_start 中的首次回调可能立即 _mark_stopped()
        self._state = ComponentState.RUNNING
        try:
            success = self._do_start()
        except Exception as e:
            self._state = ComponentState.ERROR
            app_logger.log_error(e, f"{self._component_name}_start")
            return False

        if not success:
            self._state = ComponentState.ERROR
        elif self._state == ComponentState.RUNNING:
            app_logger.log_lifecycle_event(
                f"{self._component_name} started", {"component": self._component_name}
            )

        return success

    def stop(self) -> bool:
        """Stop the component; no-op when already stopped

        Returns:
            True if stop successful, False otherwise
        """
        if self._state == ComponentState.STOPPED:
            return True

        try:
            success = self._do_stop()
        except Exception as e:
            self._state = ComponentState.ERROR
            app_logger.log_error(e, f"{self._component_name}_stop")
            return False

        if success:
            self._state = ComponentState.STOPPED
            app_logger.log_lifecycle_event(
                f"{self._component_name} stopped", {"component": self._component_name}
            )
        else:
            self._state = ComponentState.ERROR

        return success

    def _mark_stopped(self, reason: str) -> None:
        """Record that the component stopped on its own"""
        if self._state == ComponentState.STOPPED:
            return
        self._state = ComponentState.STOPPED
        app_logger.log_lifecycle_event(
            f"{self._component_name} stopped",
            {"component": self._component_name, "reason": reason},
        )

    @abstractmethod
    def _do_start(self) -> bool:
        """Subclass-specific start logic

        Returns:
            True if start successful
        """
        pass

    @abstractmethod
    def _do_stop(self) -> bool:
        """Subclass-specific stop logic

        Returns:
            True if stop successful
        """
        pass

    @property
    def is_running(self) -> bool:
        """Check if component is currently running"""
        return self._state == ComponentState.RUNNING

    @property
    def state(self) -> ComponentState:
        return self._state

    @property
    def component_name(self) -> str:
        return self._component_name
