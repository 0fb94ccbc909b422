"""
Command-line scripts
"""
