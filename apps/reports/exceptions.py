"""
Exceptions raised by the report services.

Views match on the exception class; the messages are kept stable
("Project not found", "User not found") because API clients compare them.
"""

from django.core.exceptions import ObjectDoesNotExist

PROJECT_NOT_FOUND = 'Project not found'
USER_NOT_FOUND = 'User not found'


class NotFoundError(ObjectDoesNotExist):
    """The project or user a report was requested for does not exist."""
