"""
Utility modules: exceptions, JWT helpers and FastAPI dependencies.
"""
