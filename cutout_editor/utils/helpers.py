DEFAULT_TOLERANCE = 60
MAX_TOLERANCE = 200


def clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(v)))


def clamp_tolerance(tol) -> int:
    if tol is None:
        return DEFAULT_TOLERANCE
    return clamp(tol, 0, MAX_TOLERANCE)


def parse_point(s: str) -> tuple[int, int]:
    """Parse "x,y" into an (x, y) tuple."""
    parts = [p.strip() for p in (s or "").split(",")]
    if len(parts) != 2:
        raise ValueError(f"Expected x,y but got: {s!r}")
    return int(parts[0]), int(parts[1])


def parse_rect(s: str) -> tuple[int, int, int, int]:
    parts = [p.strip() for p in (s or "").split(",")]
    if len(parts) != 4:
        raise ValueError(f"Expected x,y,w,h but got: {s!r}")
    x, y, w, h = (int(p) for p in parts)
    return x, y, w, h


def parse_path(s: str) -> list[tuple[int, int]]:
    """
    Parse a closed path written as "x,y;x,y;x,y". Blank tokens are ignored
    so a trailing separator is harmless.
    """
    if not s:
        return []
    out = []
    for token in s.split(";"):
        token = token.strip()
        if not token:
            continue
        out.append(parse_point(token))
    return out
