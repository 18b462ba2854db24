"""
services/ - Presentation Helpers
================================
Services call repositories and turn the results into text for the CLI.
"""
