"""
Admin configuration for projects app.
"""

from django.contrib import admin

from .models import Project


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """Admin for Project model."""

    list_display = ('name', 'owner', 'member_count', 'created_at')
    search_fields = ('name', 'description')
    ordering = ('name',)
    filter_horizontal = ('members',)
    readonly_fields = ('created_at', 'updated_at')

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('owner').prefetch_related('members')

    def member_count(self, obj):
        return obj.members.count()
    member_count.short_description = 'Members'
