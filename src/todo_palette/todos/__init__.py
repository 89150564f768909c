"""
Todo subsystem.

Components:
- todo_models.py: data structures (Todo, Filter) + storage record codec
- todo_store.py: canonical ordered collection, persisted on every mutation
- filters.py: visible subset and counts for the active filter
- suggestions.py: add-palette suggestions and the rotating placeholder
"""
