"""clinref_server — read-only FastAPI surface over the reference catalogs.

Exposes code lookup, drug interaction checks and catalog status to UI
collaborators.  Both catalogs are loaded once at startup.
"""
