"""Construcción de URLs de avatar (UI Avatars y DiceBear 7.x).

Solo se arman URLs; nunca se descargan imágenes.
"""

from __future__ import annotations

import re
from urllib.parse import urlencode

from core.lookups import string_hash

BRAND_PRIMARY = "0D6661"
PROFESSIONAL_STYLES: tuple[str, ...] = ("initials", "avataaars", "personas", "lorelei", "notionists")
INITIALS_BACKGROUNDS: tuple[str, ...] = ("0D6661", "164643", "75A3AB", "FC7E00")


def ui_avatar_url(
    name: str = "Unknown User",
    *,
    size: int = 200,
    background: str = BRAND_PRIMARY,
    color: str = "FFFFFF",
    fmt: str = "svg",
) -> str:
    params = {
        "name": name,
        "size": str(size),
        "background": background,
        "color": color,
        "format": fmt,
        "bold": "true",
        "font-size": "0.4",
    }
    return f"https://ui-avatars.com/api/?{urlencode(params)}"


def dicebear_avatar_url(
    name: str = "Unknown",
    *,
    style: str = "initials",
    size: int = 200,
    background: str = "transparent",
) -> str:
    seed = re.sub(r"\s+", "", name).lower()
    params = {
        "seed": seed,
        "size": str(size),
        "backgroundColor": "" if background == "transparent" else background,
    }
    return f"https://api.dicebear.com/7.x/{style}/svg?{urlencode(params)}"


def professional_avatar_url(
    first_name: str,
    last_name: str,
    index: int | None = None,
) -> str:
    """Elige estilo por índice (o por hash del nombre) para dar variedad estable."""

    full_name = f"{first_name} {last_name}"
    style_index = index if index is not None else abs(string_hash(full_name))
    style = PROFESSIONAL_STYLES[style_index % len(PROFESSIONAL_STYLES)]

    if style == "initials":
        background = INITIALS_BACKGROUNDS[style_index % len(INITIALS_BACKGROUNDS)]
        # Texto oscuro sobre el naranja de marca; blanco en el resto.
        color = "164643" if background == "FC7E00" else "FFFFFF"
        return ui_avatar_url(full_name, size=400, background=background, color=color)

    return dicebear_avatar_url(full_name, style=style, size=400)
