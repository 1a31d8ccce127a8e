from .uniqueness import UniquenessValidator, get_unique_columns

__all__ = ["UniquenessValidator", "get_unique_columns"]
