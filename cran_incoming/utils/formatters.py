"""Data formatting utilities."""


def format_bytes(bytes_value: int, decimal_places: int = 2) -> str:
    """
    Format bytes to human-readable string.

    Args:
        bytes_value: Size in bytes
        decimal_places: Number of decimal places

    Returns:
        Formatted string (e.g., "1.50 MB")
    """
    if bytes_value < 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB", "TB"]
    unit_index = 0

    size = float(bytes_value)
    while size >= 1024.0 and unit_index < len(units) - 1:
        size /= 1024.0
        unit_index += 1

    return f"{size:.{decimal_places}f} {units[unit_index]}"


def format_duration_ms(milliseconds: int) -> str:
    """
    Format a capture duration.

    Args:
        milliseconds: Duration in milliseconds

    Returns:
        Formatted duration (e.g., "850ms", "4.8s", "2m 5s")
    """
    if milliseconds < 1000:
        return f"{milliseconds}ms"

    seconds = milliseconds / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"

    minutes = int(seconds // 60)
    return f"{minutes}m {int(seconds % 60)}s"
