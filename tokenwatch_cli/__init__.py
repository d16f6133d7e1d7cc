"""
tokenwatch command-line interface
"""
