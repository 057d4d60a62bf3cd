"""
Infrastructure layer

Filesystem, QR rendering, scheduling and logging adapters.
"""
