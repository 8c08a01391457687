"""Shared field validators"""


def not_null(value):
    """Partial updates may omit a field, but not null out a required column"""
    if value is None:
        raise ValueError("must not be null")
    return value
