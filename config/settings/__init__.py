"""
Settings package for task_manager project.

Select a module explicitly with DJANGO_SETTINGS_MODULE:
- config.settings.development (default for manage.py)
- config.settings.production
- config.settings.test (pytest)
"""
