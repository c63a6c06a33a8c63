"""
Admin configuration for tasks app.
"""

from django.contrib import admin

from .forms import TaskAdminForm
from .models import Task, Subtask
from .validators import migrate_legacy_statuses


class SubtaskInline(admin.TabularInline):
    """Inline admin for subtasks on task detail."""
    model = Subtask
    fk_name = 'parent_task'
    extra = 0
    fields = ('title', 'status', 'assignee', 'due_date', 'time_taken', 'archived')


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Admin for Task model."""

    form = TaskAdminForm
    list_display = (
        'title', 'project', 'owner', 'status', 'priority',
        'due_date', 'time_taken', 'archived', 'created_at'
    )
    list_filter = ('status', 'priority', 'archived', 'project', 'created_at')
    search_fields = ('title', 'description', 'tags')
    ordering = ('-created_at',)
    date_hierarchy = 'created_at'
    filter_horizontal = ('assignees',)
    readonly_fields = ('updated_at', 'archived_at')

    fieldsets = (
        (None, {
            'fields': ('title', 'description', 'tags')
        }),
        ('Assignment', {
            'fields': ('project', 'owner', 'assignees')
        }),
        ('Status & Priority', {
            'fields': ('status', 'priority', 'due_date', 'time_taken')
        }),
        ('Archive', {
            'fields': ('archived', 'archived_at'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    inlines = [SubtaskInline]
    actions = ['map_legacy_statuses']

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('project', 'owner')

    def map_legacy_statuses(self, request, queryset):
        """Rewrite legacy statuses ("Done") on all tasks and subtasks."""
        count = migrate_legacy_statuses(Task, Subtask)
        self.message_user(request, f'{count} record(s) moved to the current status set.')
    map_legacy_statuses.short_description = 'Map legacy statuses on all tasks and subtasks'


@admin.register(Subtask)
class SubtaskAdmin(admin.ModelAdmin):
    """Admin for Subtask model."""

    list_display = (
        'title', 'parent_task', 'project', 'owner', 'assignee',
        'status', 'time_taken', 'archived', 'created_at'
    )
    list_filter = ('status', 'archived', 'project')
    search_fields = ('title', 'description', 'tags')
    ordering = ('-created_at',)
    readonly_fields = ('updated_at', 'archived_at')

    def get_queryset(self, request):
        return super().get_queryset(request).select_related(
            'parent_task', 'project', 'owner', 'assignee'
        )
