"""
mapping/ - Row Reconstruction Layer
===================================
Turns the flat rows of a one-to-many join back into parent entities
that own their children. Pure functions only: no SQL and no connections.
"""
