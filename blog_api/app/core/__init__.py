"""
Core infrastructure: settings, logging, errors, validation and the
MongoDB store.
"""
