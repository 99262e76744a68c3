"""Shared constants and helpers."""

# Default asset file name inside quotebox/data/.
QUOTES_ASSET = "quotes.txt"

# Display text shown in place of a quote.
MSG_LOADING = "Loading..."
MSG_RESOURCE_MISSING = "Error: quotes file not found."
MSG_LOAD_FAILED = "Error: quotes file could not be read."
MSG_MALFORMED = "Error: quotes file is not formatted correctly."
MSG_NO_DATA = "No quotes available."
MSG_NO_QUOTES_ANYWHERE = "No category has any quotes."
MSG_EMPTY_CATEGORY = "This category has no quotes."


def noop(_msg: str) -> None:
    """No-op log callback."""
    pass
