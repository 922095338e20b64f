"""
Keyword search over parts and illustrative images.
"""
