"""
models/ - Domain Layer
======================
Plain dataclasses: the generic join-row and entity shapes, and the
student/book models built from them.
"""
