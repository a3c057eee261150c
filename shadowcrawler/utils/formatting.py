"""
Fonctions de formatage pour l'affichage.

- format_bytes : taille en octets lisible ("1.5 KB", "0 Bytes")
- format_duration : duree en secondes ("1h02m03s")
"""

from typing import Optional

_BYTE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def format_bytes(size_bytes: int) -> str:
    """
    Formate une taille en octets (base 1024, 2 decimales au plus).

    Exemples:
        >>> format_bytes(0)
        '0 Bytes'
        >>> format_bytes(1536)
        '1.5 KB'
    """
    if size_bytes <= 0:
        return "0 Bytes"
    index = 0
    while size_bytes >= 1024 ** (index + 1) and index < len(_BYTE_UNITS) - 1:
        index += 1
    value = f"{size_bytes / 1024 ** index:.2f}".rstrip("0").rstrip(".")
    return f"{value} {_BYTE_UNITS[index]}"


def format_duration(seconds: Optional[float]) -> str:
    """Formate une duree en secondes en format 1h02m03s."""
    if seconds is None:
        return "?"
    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    if hours > 0:
        return f"{hours}h{minutes:02d}m{secs:02d}s"
    return f"{minutes}m{secs:02d}s"
