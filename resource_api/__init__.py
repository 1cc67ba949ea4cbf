"""
In-memory users and posts resource API.
"""
