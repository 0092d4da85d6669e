"""
handlers/ - Presentation Layer
================================
Protocol message handlers. A handler receives one raw request line,
decodes it, delegates to the appropriate Service, and hands the typed
response back to the transport. No SQL lives here.
"""
