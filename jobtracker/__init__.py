"""
Job tracker API: per-user job postings behind token authentication.
"""
