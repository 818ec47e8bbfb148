"""
Application layer - Core workflow.

Contains the mirror pipeline:
- pipeline: list, build the directory tree, fetch and write bucket objects
"""
