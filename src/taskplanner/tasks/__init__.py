"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, TaskPriority) and deadline predicates
- task_store.py: in-memory collection, id allocation, CRUD
- task_query.py: pure filter/search/sort/statistics helpers over a snapshot
"""
