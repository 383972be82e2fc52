import pytest

from random_media.domain.models import MediaRecord


def hit(id, views=0, downloads=0, likes=0, comments=0, **extra):
    d = {"id": id, "views": views, "downloads": downloads, "likes": likes, "comments": comments}
    d.update(extra)
    return d


def rec(id, views=0, downloads=0, likes=0, comments=0, **extra):
    return MediaRecord.from_hit(hit(id, views, downloads, likes, comments, **extra))


@pytest.fixture
def example_three():
    """item1 ~0.41, item2 ~0.31, item3 0.66 with the default weights."""
    return [
        rec(1, views=100, likes=50, downloads=20),
        rec(2, views=100, likes=10, downloads=80),
        rec(3, views=10, likes=9, downloads=1),
    ]


@pytest.fixture
def twenty():
    # strictly decreasing score by id
    return [rec(i, views=1000, likes=1000 - i * 10, downloads=500 - i * 5) for i in range(20)]
