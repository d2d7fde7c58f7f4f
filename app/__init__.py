"""
HTTP layer for the card statement converter.
"""
