"""
Default catalog contents.

Six ongoing comics, each with seven chapters: chapters 1-6 are free and
already released, chapter 7 is premium early access for another 7 days.
Dates are computed from the injected now.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from src.domain.entities import Ad, Chapter, Comic

CHAPTERS_PER_COMIC = 7
EARLY_ACCESS_DAYS = 7

CHAPTER_TITLES = [
    "The Awakening",
    "New Powers",
    "First Battle",
    "Hidden Truth",
    "The Betrayal",
    "Rising Conflict",
    "Breaking Point",
    "Revelation",
    "The Final Stand",
    "New Beginning",
]

PAGES_PER_COMIC = 8


def default_comics() -> list[Comic]:
    return [
        Comic(
            id="1",
            title="Solo Max-Level Newbie",
            author="Hwabong",
            cover_image="covers/1.webp",
            description="A gamer who cleared the hardest tower is thrown into it for real.",
            genres=["Action", "Fantasy", "Adventure"],
            rating=4.9,
            total_chapters=CHAPTERS_PER_COMIC,
        ),
        Comic(
            id="2",
            title="Absolute Regression",
            author="Jang Young-hoon",
            cover_image="covers/2.webp",
            description="A chance to climb the Tower and have any wish granted.",
            genres=["Fantasy", "Mystery", "Action"],
            rating=4.8,
            total_chapters=CHAPTERS_PER_COMIC,
        ),
        Comic(
            id="3",
            title="Regressor Instruction Manual",
            author="Park Seo-Jun",
            cover_image="covers/3.webp",
            description="Betrayed and left for dead, a hero returns after 20 years.",
            genres=["Action", "Drama", "Revenge"],
            rating=4.7,
            total_chapters=CHAPTERS_PER_COMIC,
        ),
        Comic(
            id="4",
            title="Overgeared.",
            author="Choi Yeon-Woo",
            cover_image="covers/4.webp",
            description="One man discovers an ability that lets him level up without limit.",
            genres=["Action", "Fantasy", "Adventure"],
            rating=4.6,
            total_chapters=CHAPTERS_PER_COMIC,
        ),
        Comic(
            id="5",
            title="Trash of the Count's Family",
            author="Kim Sung-Min",
            cover_image="covers/5.webp",
            description="A reincarnated king sets out to correct his past mistakes.",
            genres=["Fantasy", "Romance", "Adventure"],
            rating=4.9,
            total_chapters=CHAPTERS_PER_COMIC,
        ),
        Comic(
            id="6",
            title="Revenge of the Iron-Blooded Swordhound",
            author="Jung Hae-In",
            cover_image="covers/6.webp",
            description="The sole reader of a web novel wakes up inside the story.",
            genres=["Fantasy", "Action", "Thriller"],
            rating=4.8,
            total_chapters=CHAPTERS_PER_COMIC,
        ),
    ]


def default_ads() -> list[Ad]:
    return [
        Ad(
            id="ad-1",
            title="Upgrade to Premium!",
            description="Get ad-free reading and early access to new chapters.",
            image_url="ads/premium.webp",
            link_url="#premium",
            button_text="Go Premium",
            is_active=True,
            show_frequency="every-2",
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
        ),
        Ad(
            id="ad-2",
            title="New Comics Every Week!",
            description="Discover new series added weekly.",
            image_url="ads/weekly.webp",
            link_url="#browse",
            button_text="Browse Comics",
            is_active=True,
            show_frequency="every-3",
            created_at=datetime(2024, 1, 15, tzinfo=UTC),
        ),
        Ad(
            id="ad-3",
            title="Join Our Community!",
            description="Share theories and discuss your favorite series.",
            image_url="ads/community.webp",
            link_url="#community",
            button_text="Join Discord",
            is_active=False,
            show_frequency="every-5",
            created_at=datetime(2024, 2, 1, tzinfo=UTC),
        ),
    ]


def chapter_title(number: int) -> str:
    return f"Chapter {number}: {CHAPTER_TITLES[number % len(CHAPTER_TITLES)]}"


def chapter_pages(comic_id: str, number: int) -> list[str]:
    # 3-5 pages, cycling through the comic's page pool
    count = 3 + (number % 3)
    return [
        f"pages/{comic_id}/{(number + i) % PAGES_PER_COMIC}.webp" for i in range(count)
    ]


def generate_chapters(comic_id: str, now: datetime) -> list[Chapter]:
    chapters: list[Chapter] = []
    day = timedelta(days=1)

    for number in range(1, CHAPTERS_PER_COMIC + 1):
        if number < CHAPTERS_PER_COMIC:
            # Chapter 1 released 5 days ago, chapter 6 today
            release_date = now - (CHAPTERS_PER_COMIC - 1 - number) * day
            premium_release_date = release_date - EARLY_ACCESS_DAYS * day
            is_locked = False
        else:
            premium_release_date = now
            release_date = now + EARLY_ACCESS_DAYS * day
            is_locked = True

        chapters.append(
            Chapter(
                id=f"{comic_id}-{number}",
                comic_id=comic_id,
                number=number,
                title=chapter_title(number),
                release_date=release_date,
                premium_release_date=premium_release_date,
                is_locked=is_locked,
                pages=chapter_pages(comic_id, number),
            )
        )

    return chapters


def default_chapters(comics: list[Comic], now: datetime) -> dict[str, list[Chapter]]:
    return {comic.id: generate_chapters(comic.id, now) for comic in comics}
