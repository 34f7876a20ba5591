"""
Job Board
Admins post jobs, applicants apply with a resume file or link.

Architecture:
- MongoDB: jobs, applications, admin users
- Local blob storage: uploaded resumes
- FastAPI: JSON API, validation and auth
"""

__version__ = "1.0.0"
