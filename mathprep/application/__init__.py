"""
Application layer: use-case services orchestrating CRUD and core logic.
"""
