"""
models/ - Domain Models
=======================
Plain immutable carriers: decoded queries, server responses and
repository results.
"""
