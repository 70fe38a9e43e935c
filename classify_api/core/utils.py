import hashlib


def calculate_content_hash(text: str) -> str:
    """
    Computes the SHA256 hash of a string for log correlation.

    Args:
        text (str): The input text to classify.

    Returns:
        str: The hexadecimal hash string.
    """
    # Normalize text (lowercase, strip) so trivially different inputs correlate
    normalized_text = text.lower().strip()
    return hashlib.sha256(normalized_text.encode("utf-8")).hexdigest()


def truncate(text: str, limit: int = 80) -> str:
    """
    Shortens model output for log lines.
    """
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[: limit - 3] + "..."
