"""Uniform type identifiers and their conformance hierarchy."""

from __future__ import annotations

IMAGE = "public.image"
MOVIE = "public.movie"
TEXT = "public.text"
URL = "public.url"
FILE_URL = "public.file-url"

# child -> direct parents
_PARENTS: dict[str, tuple[str, ...]] = {
    "public.png": (IMAGE,),
    "public.jpeg": (IMAGE,),
    "public.heic": (IMAGE,),
    "com.compuserve.gif": (IMAGE,),
    "public.mpeg-4": (MOVIE,),
    "com.apple.quicktime-movie": (MOVIE,),
    "public.plain-text": (TEXT,),
    "public.utf8-plain-text": ("public.plain-text",),
    FILE_URL: (URL,),
    "com.adobe.pdf": ("public.data",),
}


def conforms_to(type_identifier: str, parent: str) -> bool:
    """Return True if ``type_identifier`` is ``parent`` or descends from it."""
    pending = [type_identifier]
    seen: set[str] = set()
    while pending:
        current = pending.pop()
        if current == parent:
            return True
        if current in seen:
            continue
        seen.add(current)
        pending.extend(_PARENTS.get(current, ()))
    return False
