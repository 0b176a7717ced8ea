"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskEdit, TaskStatus, TaskPriority)
- task_store.py: access over the "tasks" document collection
- due_window.py: due-window selection and result capping
- task_api.py: result-shaped actions used by the rest of the app
"""
