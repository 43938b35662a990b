"""
Task subsystem.

Components:
- task_models.py: data structures (Task) and id generation
- todo_list.py: the list client (initialize/fetch/add/toggle/delete)
"""
