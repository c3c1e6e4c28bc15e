"""Centralized role normalization utility.

Champion data, query parameters and LLM responses all spell lanes
differently. Everything is normalized to the catalog's canonical lowercase
format: top, jungle, mid, adc, support.
"""

from typing import Optional

ROLE_ALIASES: dict[str, str] = {
    # Top lane
    "top": "top",
    "top laner": "top",
    "toplane": "top",

    # Jungle
    "jungle": "jungle",
    "jungler": "jungle",
    "jng": "jungle",
    "jg": "jungle",

    # Mid lane
    "mid": "mid",
    "middle": "mid",
    "mid laner": "mid",
    "midlane": "mid",

    # Bot lane carry - all normalize to "adc"
    "adc": "adc",
    "bot": "adc",
    "bottom": "adc",
    "ad carry": "adc",
    "marksman": "adc",

    # Support
    "support": "support",
    "sup": "support",
    "supp": "support",
    "utility": "support",
}


def normalize_role(role: Optional[str]) -> Optional[str]:
    """Normalize a role string to canonical lowercase format.

    Args:
        role: Role string in any known format (e.g., "JNG", "jungle", "ADC", "bot")

    Returns:
        Normalized role (top/jungle/mid/adc/support) or None if invalid/None

    Examples:
        >>> normalize_role("JNG")
        'jungle'
        >>> normalize_role("bot")
        'adc'
        >>> normalize_role(None)
    """
    if role is None:
        return None
    return ROLE_ALIASES.get(role.strip().lower())

