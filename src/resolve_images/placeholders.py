"""Curated placeholder images, picked deterministically per title."""

from common.hashing import stable_index

_UNSPLASH = "https://images.unsplash.com/{photo}?w=1200&h=630&fit=crop"

PLACEHOLDER_POOLS = {
    "default": [
        "photo-1504711434969-e33886168f5c",
        "photo-1495020689067-958852a7765e",
        "photo-1585829365295-ab7cd400c167",
        "photo-1586339949916-3e9457bef6d3",
    ],
    "politics": [
        "photo-1529107386315-e1a2ed48a620",
        "photo-1541872703-74c5e44368f9",
        "photo-1555848962-6e79363ec58f",
    ],
    "technology": [
        "photo-1518770660439-4636190af475",
        "photo-1485827404703-89b55fcc595e",
        "photo-1550751827-4bd374c3f58b",
        "photo-1531297484001-80022131f5a1",
    ],
    "business": [
        "photo-1611974789855-9c2a0a7236a3",
        "photo-1590283603385-17ffb3a7f29f",
        "photo-1460925895917-afdab827c52f",
    ],
    "sports": [
        "photo-1461896836934-ffe607ba8211",
        "photo-1517649763962-0c623066013b",
        "photo-1540747913346-19e32dc3e97e",
    ],
    "entertainment": [
        "photo-1514525253161-7a46d19cd819",
        "photo-1489599849927-2ee91cede3ba",
        "photo-1470229722913-7c0e2dbbafd3",
    ],
    "health": [
        "photo-1505751172876-fa1923c5c528",
        "photo-1576091160399-112ba8d25d1d",
        "photo-1532938911079-1b06ac7ceec7",
    ],
    "science": [
        "photo-1507413245164-6160d8298b31",
        "photo-1532094349884-543bc11b234d",
        "photo-1446776811953-b23d57bd21aa",
    ],
    "world": [
        "photo-1451187580459-43490279c0fa",
        "photo-1526470608268-f674ce90ebd4",
        "photo-1524661135-423995f22d0b",
    ],
}


def placeholder_image(title: str, category: str | None = None) -> str:
    """Same title and category always give the same URL."""
    pool = PLACEHOLDER_POOLS.get((category or "").strip().lower()) or PLACEHOLDER_POOLS["default"]
    photo = pool[stable_index(title or "", len(pool))]
    return _UNSPLASH.format(photo=photo)
