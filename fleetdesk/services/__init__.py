"""
Stateful operations over the database and the blob store.
"""
