"""
Root conftest so the src package imports from a source checkout.
"""
