"""
utils/ - Shared Helpers
=======================
Logging setup and the JSON query/response codec.
"""
