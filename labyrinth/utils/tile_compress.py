"""Compact encoding of coordinate lists for the chunk endpoint.

Format strategy:
  - Raw form: semicolon separated ``x,z`` pairs in the given order.
  - Compressed form: ``D:`` followed by the first pair and then per-pair
    deltas, ``|`` separated. Wall chunks are scanned column by column, so
    most deltas are ``0,1`` and compress well.
  - The compressed form is only used when it is shorter than the raw form.

Compressed grammar:
  D:x0,z0|dx1,dz1|dx2,dz2|...

Order is preserved (no sorting) so a decoded list matches the chunk order.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

Coord = Tuple[int, int]


def _raw(coords: List[Coord]) -> str:
    return ";".join(f"{x},{z}" for x, z in coords)


def compress_coords(coords: Iterable[Coord]) -> str:
    """Return the shorter of the raw and ``D:`` delta encodings of ``coords``."""
    coords = list(coords)
    raw = _raw(coords)
    if len(coords) < 2:
        return raw
    pieces = []
    prev_x, prev_z = None, None
    for x, z in coords:
        if prev_x is None:
            pieces.append(f"{x},{z}")
        else:
            pieces.append(f"{x - prev_x},{z - prev_z}")
        prev_x, prev_z = x, z
    compressed = "D:" + "|".join(pieces)
    return compressed if len(compressed) < len(raw) else raw


def decompress_coords(data: str) -> List[Coord]:
    """Inverse of :func:`compress_coords` for either encoding.

    Raises ValueError on malformed input.
    """
    if not data:
        return []
    if not data.startswith("D:"):
        out = []
        for part in data.split(";"):
            x_s, z_s = part.split(",")
            out.append((int(x_s), int(z_s)))
        return out
    coords: List[Coord] = []
    prev_x, prev_z = None, None
    for token in data[2:].split("|"):
        x_s, z_s = token.split(",")
        dx, dz = int(x_s), int(z_s)
        if prev_x is None:
            x, z = dx, dz
        else:
            x, z = prev_x + dx, prev_z + dz
        coords.append((x, z))
        prev_x, prev_z = x, z
    return coords


__all__ = ["compress_coords", "decompress_coords"]
