"""
Services package for the phrase highlight API.
"""
