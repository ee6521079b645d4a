"""
WOPR session engine, transports and connection handling.
"""
