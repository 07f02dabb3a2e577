"""
CRUD operations (Create, Read, Update, Delete) for database models.

This layer keeps SQL out of the API routes: every statement is written with
positional placeholders and executed through jobly.core.database.run_query.
"""

from jobly.crud import company, job, user

__all__ = ["company", "job", "user"]
