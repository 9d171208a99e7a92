"""Output formatting helpers for the toolwarden CLI."""

from __future__ import annotations

__all__ = [
    "format_error",
    "format_success",
    "format_warning",
    "format_table",
]


def format_error(
    message: str, details: list[str] | None = None, suggestion: str | None = None
) -> str:
    """Format an error message with optional details and suggestion.

    Args:
        message: Primary error message.
        details: Optional list of detail lines to include.
        suggestion: Optional suggestion for resolving the error.

    Returns:
        Formatted error string with details and suggestion if provided.

    Example:
        >>> print(format_error(
        ...     "go binary not found in PATH",
        ...     suggestion="Run 'toolwarden go deps'",
        ... ))
        Error: go binary not found in PATH
        Suggestion: Run 'toolwarden go deps'
    """
    lines = [f"Error: {message}"]

    if details:
        for detail in details:
            lines.append(f"  {detail}")

    if suggestion:
        lines.append(f"Suggestion: {suggestion}")

    return "\n".join(lines)


def format_success(message: str) -> str:
    """Format a success message.

    Example:
        >>> format_success("All dependency verifications passed")
        'Success: All dependency verifications passed'
    """
    return f"Success: {message}"


def format_warning(message: str) -> str:
    """Format a warning message.

    Example:
        >>> format_warning("Git user.name or user.email is not configured")
        'Warning: Git user.name or user.email is not configured'
    """
    return f"Warning: {message}"


def format_table(headers: list[str], rows: list[list[str]]) -> str:
    """Format rows as a simple text table with pipe separators.

    Example:
        >>> print(format_table(["Key", "Value"], [["Branch", "main"]]))
        Key    | Value
        Branch | main
    """
    if not headers:
        return ""

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < len(col_widths):
                col_widths[i] = max(col_widths[i], len(cell))

    lines = [" | ".join(h.ljust(col_widths[i]) for i, h in enumerate(headers))]
    for row in rows:
        lines.append(
            " | ".join(
                cell.ljust(col_widths[i]) if i < len(col_widths) else cell
                for i, cell in enumerate(row)
            )
        )
    return "\n".join(line.rstrip() for line in lines)
