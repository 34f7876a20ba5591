"""
Services module - job board operations on top of the backend context.

- validation: pure form checks
- job_service: create, list, get, delete jobs
- application_service: submission workflow, duplicate check, listing
- auth_service: admin accounts and auth state notifications
- subscription: live job list snapshots
"""
