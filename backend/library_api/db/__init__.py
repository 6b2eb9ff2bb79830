"""Database Declarations — SQLAlchemy Base shared by every ORM model.

Invariants:
    - Single metadata object for users and resources
"""
