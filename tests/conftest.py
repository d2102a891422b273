import sqlite3
from types import SimpleNamespace

import pytest
from loguru import logger

from coursesql.schema import load_schema_descriptor

SECTIONS = [
    # id, term, term_description, crn, number, subject, subject_description, section,
    # campus, schedule_type, course_title, credit_hours, max_enrollment, enrollment,
    # seats_available, waitlist_capacity, waitlist_count, waitlist_available, open,
    # attributes, raw
    ("202408-81234", "202408", "Fall 2024", "81234", "1331", "CS", "Computer Science", "A",
     "Georgia Tech-Atlanta *", "Lecture*", "Intro-Object Oriented Prog", 3,
     300, 280, 20, 50, 0, 50, "true", None, '{"id": 1}'),
    ("202408-81235", "202408", "Fall 2024", "81235", "1332", "CS", "Computer Science", "B",
     "Georgia Tech-Atlanta *", "Lecture*", "Data Struct & Alg", 3,
     200, 200, 0, 20, 5, 15, "false", None, '{"id": 2}'),
    ("202408-90001", "202408", "Fall 2024", "90001", "8803", "CS", "Computer Science", "ANI",
     "Georgia Tech-Atlanta *", "Lecture*", "Special Topics", 3,
     40, 10, 30, 10, 0, 10, "true", "ETHS,HUM", '{"id": 3}'),
    ("202408-00042", "202408", "Fall 2024", "00042", "2211", "PHYS", "Physics", "O",
     "Online", "Lecture*", "Intro Physics II", 4,
     100, 50, 50, 0, 0, 0, "true", None, '{"id": 4}'),
]


@pytest.fixture
def course_db(tmp_path):
    """A small database built from the bundled schema descriptor"""
    path = tmp_path / "courses.sqlite3"
    conn = sqlite3.connect(str(path))
    conn.executescript(load_schema_descriptor())
    conn.executemany(
        f"INSERT INTO sections VALUES ({', '.join('?' * 21)})",
        SECTIONS,
    )
    conn.execute("INSERT INTO faculty VALUES ('f1', 'Ada Lovelace', 'ada@gatech.edu')")
    conn.execute("INSERT INTO course_faculty VALUES ('202408-81234', 'f1')")
    conn.commit()
    conn.close()
    return str(path)


class FakeChatClient:
    """Stands in for openai.AsyncOpenAI: records requests and replays a canned reply"""

    def __init__(self, content=None, error=None, choices=None):
        self.content = content
        self.error = error
        self.choices = choices
        self.requests = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    async def _create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.choices is not None:
            return SimpleNamespace(choices=self.choices)
        message = SimpleNamespace(role="assistant", content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(index=0, message=message)])


@pytest.fixture
def fake_client():
    return FakeChatClient


@pytest.fixture(autouse=True)
def quiet_logger():
    logger.remove()
    yield
    logger.remove()
