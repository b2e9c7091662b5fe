import math


def like_pattern(term: str) -> str:
    """Substring pattern for ILIKE with the user's wildcards escaped (escape char ``\\``)."""
    escaped = term.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def paginate(query, page: int, limit: int):
    """Return ``(rows, total)`` for a 1-based page; pages past the end are empty."""
    total = query.order_by(None).count()
    offset = (page - 1) * limit
    rows = query.offset(offset).limit(limit).all()
    return rows, total
