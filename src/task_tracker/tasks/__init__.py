"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority, Status) and input parsing
- task_errors.py: ValidationError / StorageError
- task_store.py: SQLite-backed storage + query helpers
- task_stats.py: pure statistics and ordering over a task snapshot
- task_service.py: application-facing operations used by the shell
"""
