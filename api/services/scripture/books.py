# api/services/scripture/books.py
"""
Book name table for citation parsing and formatting.

Each entry names a book by its long form ("1 Nephi"), its abbreviated form
("1 Ne.") and the slug used by churchofjesuschrist.org study URLs. Lookups are
case-sensitive exact matches against either name.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Work(Enum):
    """A volume of scripture a book belongs to."""
    OLD_TESTAMENT = "ot"
    NEW_TESTAMENT = "nt"
    BOOK_OF_MORMON = "bofm"

    @property
    def url_name(self) -> str:
        return self.value


@dataclass(frozen=True)
class BookData:
    work: Work
    long_name: str
    short_name: str
    url_name: str
    book_index: int


_OT = Work.OLD_TESTAMENT
_NT = Work.NEW_TESTAMENT
_BOFM = Work.BOOK_OF_MORMON

BOOK_DATA = (
    # Old Testament
    BookData(_OT, "Genesis", "Gen.", "gen", 0),
    BookData(_OT, "Exodus", "Ex.", "ex", 1),
    BookData(_OT, "Leviticus", "Lev.", "lev", 2),
    BookData(_OT, "Numbers", "Num.", "num", 3),
    BookData(_OT, "Deuteronomy", "Deut.", "deut", 4),
    BookData(_OT, "Joshua", "Josh.", "josh", 5),
    BookData(_OT, "Judges", "Judg.", "judg", 6),
    BookData(_OT, "Ruth", "Ruth", "ruth", 7),
    BookData(_OT, "1 Samuel", "1 Sam.", "1-sam", 8),
    BookData(_OT, "2 Samuel", "2 Sam.", "2-sam", 9),
    BookData(_OT, "1 Kings", "1 Kgs.", "1-kgs", 10),
    BookData(_OT, "2 Kings", "2 Kgs.", "2-kgs", 11),
    BookData(_OT, "1 Chronicles", "1 Chron.", "1-chron", 12),
    BookData(_OT, "2 Chronicles", "2 Chron.", "2-chron", 13),
    BookData(_OT, "Ezra", "Ezra", "ezra", 14),
    BookData(_OT, "Nehemiah", "Neh.", "neh", 15),
    BookData(_OT, "Esther", "Esth.", "esth", 16),
    BookData(_OT, "Job", "Job", "job", 17),
    BookData(_OT, "Psalms", "Ps.", "ps", 18),
    BookData(_OT, "Proverbs", "Prov.", "prov", 19),
    BookData(_OT, "Ecclesiastes", "Eccl.", "eccl", 20),
    BookData(_OT, "Song of Solomon", "Song.", "song", 21),
    BookData(_OT, "Isaiah", "Isa.", "isa", 22),
    BookData(_OT, "Jeremiah", "Jer.", "jer", 23),
    BookData(_OT, "Lamentations", "Lam.", "lam", 24),
    BookData(_OT, "Ezekiel", "Ezek.", "ezek", 25),
    BookData(_OT, "Daniel", "Dan.", "dan", 26),
    BookData(_OT, "Hosea", "Hosea", "hosea", 27),
    BookData(_OT, "Joel", "Joel", "joel", 28),
    BookData(_OT, "Amos", "Amos", "amos", 29),
    BookData(_OT, "Obadiah", "Obad.", "obad", 30),
    BookData(_OT, "Jonah", "Jonah", "jonah", 31),
    BookData(_OT, "Micah", "Micah", "micah", 32),
    BookData(_OT, "Nahum", "Nahum", "nahum", 33),
    BookData(_OT, "Habakkuk", "Hab.", "hab", 34),
    BookData(_OT, "Zephaniah", "Zeph.", "zeph", 35),
    BookData(_OT, "Haggai", "Hag.", "hag", 36),
    BookData(_OT, "Zechariah", "Zech.", "zech", 37),
    BookData(_OT, "Malachi", "Mal.", "mal", 38),

    # New Testament
    BookData(_NT, "Matthew", "Matt.", "matt", 0),
    BookData(_NT, "Mark", "Mark", "mark", 1),
    BookData(_NT, "Luke", "Luke", "luke", 2),
    BookData(_NT, "John", "John", "john", 3),
    BookData(_NT, "Acts", "Acts", "acts", 4),
    BookData(_NT, "Romans", "Rom.", "rom", 5),
    BookData(_NT, "1 Corinthians", "1 Cor.", "1-cor", 6),
    BookData(_NT, "2 Corinthians", "2 Cor.", "2-cor", 7),
    BookData(_NT, "Galatians", "Gal.", "gal", 8),
    BookData(_NT, "Ephesians", "Eph.", "eph", 9),
    BookData(_NT, "Philippians", "Philip.", "philip", 10),
    BookData(_NT, "Colossians", "Col.", "col", 11),
    BookData(_NT, "1 Thessalonians", "1 Thes.", "1-thes", 12),
    BookData(_NT, "2 Thessalonians", "2 Thes.", "2-thes", 13),
    BookData(_NT, "1 Timothy", "1 Tim.", "1-tim", 14),
    BookData(_NT, "2 Timothy", "2 Tim.", "2-tim", 15),
    BookData(_NT, "Titus", "Titus", "titus", 16),
    BookData(_NT, "Philemon", "Philem.", "philem", 17),
    BookData(_NT, "Hebrews", "Heb.", "heb", 18),
    BookData(_NT, "James", "James", "james", 19),
    BookData(_NT, "1 Peter", "1 Pet.", "1-pet", 20),
    BookData(_NT, "2 Peter", "2 Pet.", "2-pet", 21),
    BookData(_NT, "1 John", "1 Jn.", "1-jn", 22),
    BookData(_NT, "2 John", "2 Jn.", "2-jn", 23),
    BookData(_NT, "3 John", "3 Jn.", "3-jn", 24),
    BookData(_NT, "Jude", "Jude", "jude", 25),
    BookData(_NT, "Revelation", "Rev.", "rev", 26),

    # Book of Mormon
    BookData(_BOFM, "1 Nephi", "1 Ne.", "1-ne", 0),
    BookData(_BOFM, "2 Nephi", "2 Ne.", "2-ne", 1),
    BookData(_BOFM, "Jacob", "Jacob", "jacob", 2),
    BookData(_BOFM, "Enos", "Enos", "enos", 3),
    BookData(_BOFM, "Jarom", "Jarom", "jarom", 4),
    BookData(_BOFM, "Omni", "Omni", "omni", 5),
    BookData(_BOFM, "Words of Mormon", "W of M", "w-of-m", 6),
    BookData(_BOFM, "Mosiah", "Mosiah", "mosiah", 7),
    BookData(_BOFM, "Alma", "Alma", "alma", 8),
    BookData(_BOFM, "Helaman", "Hel.", "hel", 9),
    BookData(_BOFM, "3 Nephi", "3 Ne.", "3-ne", 10),
    BookData(_BOFM, "4 Nephi", "4 Ne.", "4-ne", 11),
    BookData(_BOFM, "Mormon", "Morm.", "morm", 12),
    BookData(_BOFM, "Ether", "Ether", "ether", 13),
    BookData(_BOFM, "Moroni", "Moro.", "moro", 14),
)

# Long and short names both resolve; first entry wins on a collision.
BOOK_NAMES = {}
for _book in BOOK_DATA:
    BOOK_NAMES.setdefault(_book.long_name, _book)
    BOOK_NAMES.setdefault(_book.short_name, _book)

_BY_POSITION = {(b.work, b.book_index): b for b in BOOK_DATA}


def find_book(name: str) -> Optional[BookData]:
    """Return the book whose long or short name is exactly `name`."""
    return BOOK_NAMES.get(name)


def book_at(work: Work, book_index: int) -> Optional[BookData]:
    """Return the book at `book_index` within `work`."""
    return _BY_POSITION.get((work, book_index))
