"""
Store module for durable server state.

Handles:
- Username/password records
- Transactional access to the on-disk database
"""
