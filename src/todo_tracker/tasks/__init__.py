"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus)
- task_codec.py: reader/writer for the tasks file format
- task_store.py: file-backed storage (FileTaskStore)
- task_service.py: validation and business rules (TaskService)
"""
