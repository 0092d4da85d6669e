"""
services/ - Business Logic Layer
================================
One service per domain entity. Services turn repository results into
the ServerResponse variant sent back to the client.
"""
