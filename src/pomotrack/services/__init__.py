"""Service layer for pomotrack.

The pure engines (task_policy, statistics, search, project_progress) work on
in-memory snapshots. The *Service classes load snapshots from repositories,
call the engines, and persist the results.
"""
