from smartschedule.models.notification import Notification, NotificationType  # noqa: F401
from smartschedule.models.timetable import Timetable  # noqa: F401
from smartschedule.models.user import User, UserRole  # noqa: F401
