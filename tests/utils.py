"""Test utilities for URL shortener tests."""

import random
import string
from typing import Dict, Any, Optional

from app.models.url import ShortURL


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8).lower()}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


def create_test_url_data(
    original_url: Optional[str] = None,
    short_code: Optional[str] = None,
    user_id: Optional[int] = None,
) -> Dict[str, Any]:
    """Create test data dict for a ShortURL."""
    return {
        "original_url": original_url or random_url(),
        "short_code": short_code or random_string(8),
        "user_id": user_id,
    }


async def create_test_url(
    db,
    original_url: Optional[str] = None,
    short_code: Optional[str] = None,
    user_id: Optional[int] = None,
) -> ShortURL:
    """Create and persist a test ShortURL in the database."""
    url = ShortURL(**create_test_url_data(
        original_url=original_url,
        short_code=short_code,
        user_id=user_id,
    ))
    db.add(url)
    await db.flush()
    await db.refresh(url)
    return url


class SequenceRandom(random.Random):
    """Random source whose ``choices`` returns scripted codes in order."""

    def __init__(self, codes):
        super().__init__()
        self._codes = list(codes)

    def choices(self, population, weights=None, *, cum_weights=None, k=1):
        return list(self._codes.pop(0))
