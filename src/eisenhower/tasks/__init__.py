"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Quadrant, Priority)
- task_persistence.py: JSON write-through adapter over a key-value store
- task_store.py: ordered in-memory collection + mutations
- task_views.py: filters, priority sort, progress, summary, insights
"""
