"""Exception hierarchy for the property registry.

A missing record is not an error: lookups return ``None`` and deletes
return ``False``.
"""


class PropertyRegistryError(Exception):
    """Base exception for propreg."""


class ValidationFailure(PropertyRegistryError):
    """Caller input rejected before any state was touched."""


class EmptyImageError(ValidationFailure):
    """Upload carried an empty image payload."""


class InvalidCategoryError(ValidationFailure):
    """Category tag or label is malformed."""


class InvalidPropertyIdError(ValidationFailure):
    """Property id is not a string."""


class LockFailure(PropertyRegistryError):
    """Registry lock is poisoned; the call cannot proceed."""


class ManifestError(PropertyRegistryError):
    """Seed manifest could not be loaded."""

    def __init__(self, path: str, issues: list[str]):
        self.path = path
        self.issues = issues
        super().__init__(f"{path}: " + "; ".join(issues))
