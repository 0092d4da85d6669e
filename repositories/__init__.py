"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories never raise on SQL problems: they return a RepositoryResult
describing what happened.
"""
