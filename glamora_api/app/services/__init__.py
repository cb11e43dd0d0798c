"""
Service layer abstraction.

Each service encapsulates the business logic for one domain and
receives the document store (and any other collaborators) through its
constructor, so API handlers never touch the storage backend directly.
"""
