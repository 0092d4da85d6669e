"""
server/ - Transport Layer
=========================
TCP line protocol: frames requests, renders the OK/ERR envelope.
"""
