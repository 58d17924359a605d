"""
IoTeX Explorer - API Package
==============================
Address API: schemas, handlers, route registration, middleware.
"""
