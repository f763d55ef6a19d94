from jobtracker.models.user import User
from jobtracker.models.auth_session import AuthSession
from jobtracker.models.application import Application
from jobtracker.models.past_action_notification import PastActionNotification
from jobtracker.models.connection import Connection

__all__ = [
    "User",
    "AuthSession",
    "Application",
    "PastActionNotification",
    "Connection",
]
