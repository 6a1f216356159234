class CatalogError(Exception):
	"""Base class for errors the catalog services raise on purpose."""


class ValidationError(CatalogError):
	"""One or more input fields failed their constraints.

	``errors`` maps a field name to a human readable reason. Nothing has been
	written when this is raised.
	"""

	def __init__(self, errors: dict[str, str]) -> None:
		self.errors = dict(errors)
		super().__init__("; ".join(f"{field}: {reason}" for field, reason in self.errors.items()))


class NotFoundError(CatalogError):
	def __init__(self, entity: str, identifier: object) -> None:
		self.entity = entity
		self.identifier = identifier
		super().__init__(f"{entity} {identifier} not found")


class SortColumnError(CatalogError):
	def __init__(self, column: str, allowed: tuple[str, ...]) -> None:
		self.column = column
		self.allowed = allowed
		super().__init__(f"Cannot sort by {column!r}; allowed: {', '.join(allowed)}")
