from __future__ import annotations


def normalize_number(country_code: str, local_number: str) -> str:
    """
    Compose the number the provider dials from a country code ("+1") and a
    local number as the user typed it.

    One leading trunk zero is dropped ("01234567" -> "1234567"). Nothing else
    is checked; an empty local number yields the country code alone and the
    provider rejects it.
    """
    if local_number.startswith("0"):
        local_number = local_number[1:]
    return country_code + local_number
