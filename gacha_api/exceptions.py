"""
Gacha engine exception classes.

Every domain error derives from GachaError so the API layer can turn them
into a single kind of HTTP error.
"""


class GachaError(Exception):
    """Base gacha exception"""

    def __init__(self, message: str = "An unknown gacha error occurred"):
        self.message = message
        super().__init__(self.message)


# =============================================================================
# Catalog errors
# =============================================================================


class UnknownTierError(GachaError):
    """Tier label is not part of the banner's tier set"""

    def __init__(self, tier: str):
        self.tier = tier
        super().__init__(f"Unknown tier: {tier}")


class InvalidWeightError(GachaError):
    """Item weight must be a positive number"""

    def __init__(self, name: str, weight):
        self.name = name
        self.weight = weight
        super().__init__(f"Item '{name}' has invalid weight {weight!r}; weight must be > 0")


class InvalidTierRatesError(GachaError):
    """Tier base rates cannot be used for drawing"""

    def __init__(self, message: str):
        super().__init__(f"Invalid tier rates: {message}")


class CatalogNotReadyError(GachaError):
    """No top-tier item exists, so hard pity cannot be resolved"""

    def __init__(self, top_tier: str = "SSR"):
        self.top_tier = top_tier
        super().__init__(
            f"Catalog has no {top_tier} item; add one before drawing."
        )


# =============================================================================
# Banner loading errors
# =============================================================================


class CatalogValidationError(GachaError):
    """Banner file failed validation"""

    def __init__(self, errors: list):
        self.errors = errors
        count = len(errors)
        first = errors[0]["message"] if errors else "no details"
        super().__init__(f"Banner failed validation with {count} error(s): {first}")
