"""Base sensor classes for status update monitoring.

This module defines the base StatusSensor class that provides lifecycle hooks
for monitoring status updates. All hooks are no-ops by default, allowing
subclasses to override only the events they care about.

The hook pattern:
- Hooks come in pairs: on_X_start() and on_X_complete()
- Start hooks return an optional state dict for tracking multi-phase operations
- Complete hooks receive the state dict from their corresponding start hook
- All hooks are optional - sensors only implement what they need
"""

from typing import Dict, Optional, Any
import logging

logger = logging.getLogger(__name__)


class StatusSensor:
    """Base sensor class for work status monitoring.

    All methods are no-ops by default. Subclasses override only the hooks
    they need to monitor.

    Example:
        class LoggingSensor(StatusSensor):
            def on_status_update_start(self, namespace: str, name: str) -> Dict:
                return {'start_time': time.time()}

            def on_status_update_complete(self, namespace, name, state, changed, success, error=None):
                duration = time.time() - state['start_time']
                logger.info(f"Updated {namespace}/{name} in {duration}s")
    """

    def on_status_update_start(
        self,
        namespace: str,
        name: str,
    ) -> Optional[Dict[str, Any]]:
        """Called when a status update cycle begins.

        Args:
            namespace: Namespace of the ManifestWork
            name: Name of the ManifestWork

        Returns:
            Optional state dict passed to on_status_update_complete
        """
        pass

    def on_status_update_complete(
        self,
        namespace: str,
        name: str,
        state: Optional[Dict[str, Any]],
        changed: bool,
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        """Called when a status update cycle completes.

        Args:
            namespace: Namespace of the ManifestWork
            name: Name of the ManifestWork
            state: State dict returned from on_status_update_start
            changed: Whether a write happened
            success: Whether the update succeeded
            error: Exception if the update failed
        """
        pass

    def on_status_update_conflict(
        self,
        namespace: str,
        name: str,
        attempt: int,
    ) -> None:
        """Called when a status write hits a stale resourceVersion.

        Args:
            namespace: Namespace of the ManifestWork
            name: Name of the ManifestWork
            attempt: Number of the attempt that conflicted, starting at 1
        """
        pass
