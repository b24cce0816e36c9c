"""
Exceptions raised by the splitting module
"""


class InvalidParameterError(ValueError):
    """Tile or grid dimension that cannot be used for splitting (zero, negative, non-integer)"""
