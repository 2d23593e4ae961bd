"""
Desktop notifications for the alarm
"""

import logging

from plyer import notification

logger = logging.getLogger(__name__)


class NotificationManager:
    """Mostra notificação nativa do OS"""

    def __init__(self, app_name="Clock Pro", timeout=10):
        self.app_name = app_name
        self.timeout = timeout

    def show(self, title, message):
        """Returns False when the platform could not show it; never raises."""
        try:
            notification.notify(title=title, message=message,
                                app_name=self.app_name, timeout=self.timeout)
        except Exception as e:
            logger.warning(f"Notification error: {e}")
            return False
        return True
