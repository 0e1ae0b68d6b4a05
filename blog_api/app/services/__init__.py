"""
Service layer.

Each service encapsulates the store operations for one resource and
receives the ``MongoStore`` in its constructor, so handlers never reach
for a global connection.
"""
