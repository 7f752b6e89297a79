"""Domain-specific realtime publishers.

These modules contain *publish* helpers only (build payload + emit) for sync
Django code. They must not define Socket.IO server instances or connection
handlers.
"""
