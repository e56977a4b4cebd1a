"""
Storage key layout.

Global keys hold one value for the whole installation; per-owner keys
are suffixed with the owning user's id. The platform namespace prefix
is added by the storage backend, not here.
"""

USERS_KEY = "users"
CURRENT_USER_KEY = "current_user"
TAX_RATES_KEY = "tax_rates"
THEME_PREFERENCE_KEY = "theme_preference"


def employees_key(user_id: str) -> str:
    return f"employees_{user_id}"


def individual_earnings_key(user_id: str) -> str:
    return f"individual_earnings_{user_id}"
