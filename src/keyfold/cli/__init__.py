"""
Command-line interface, interactive session and keyword selectors.
"""
