"""
Generate a static recipe website from a directory of markdown files.
"""
