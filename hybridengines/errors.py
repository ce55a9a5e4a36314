"""Error formatting utilities for consistent CLI messages.

Error Style Guide:
- User-facing errors use 'Error: ' prefix
- Use present tense: 'must be', 'is required'
- Include actionable hints where helpful
"""


def format_error(message: str) -> str:
    """Format an error message with consistent prefix.

    Examples:
        >>> format_error("config.xml not found")
        'Error: config.xml not found'
    """
    return f"Error: {message}"


def format_suggestion(message: str, suggestion: str) -> str:
    """Format an error message with a helpful suggestion.

    Examples:
        >>> format_suggestion("no engine 'android@1.0.0' installed", "run 'hybridengines installed'")
        "Error: no engine 'android@1.0.0' installed. Hint: run 'hybridengines installed'"
    """
    return f"{format_error(message)}. Hint: {suggestion}"


__all__ = [
    "format_error",
    "format_suggestion",
]
