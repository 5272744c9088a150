"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, TaskDraft)
- task_store.py: authoritative in-memory collection with write-through persistence
- persistence.py: JSON file / SQLite / in-memory persistence backends
"""
