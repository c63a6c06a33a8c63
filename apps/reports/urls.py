"""
URL configuration for reports app.
"""

from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    path(
        'task-completion/project/<int:project_id>/',
        views.project_task_completion_report,
        name='project_task_completion',
    ),
    path(
        'task-completion/user/<int:user_id>/',
        views.user_task_completion_report,
        name='user_task_completion',
    ),
    path(
        'team-summary/project/<int:project_id>/',
        views.team_summary_report,
        name='team_summary',
    ),
    path(
        'logged-time/project/<int:project_id>/',
        views.project_logged_time_report,
        name='project_logged_time',
    ),
    path(
        'logged-time/department/<str:department>/',
        views.department_logged_time_report,
        name='department_logged_time',
    ),
]
