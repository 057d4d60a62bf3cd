"""
Domain layer

Pure business rules for shared files: records, ids, digests and expiry.
"""
