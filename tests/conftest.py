"""Shared test fixtures and configuration."""

import os
from pathlib import Path
import sys

import pytest


SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


# Complete test environment that overrides every config value
TEST_ENV = {
    "LOG_LEVEL": "info",
    "LOG_JSON": "true",
    "STORE_PATH": "",
    "HISTORY_LIMIT": "20",
    "POPULAR_TERMS_LIMIT": "10",
    "MIN_TRACKED_TERM_LENGTH": "3",
    "SUGGESTION_LIMIT": "5",
    "FACET_LIMIT": "10",
}


# Set environment variables immediately when conftest.py is loaded
for key, value in TEST_ENV.items():
    os.environ[key] = value

from portal_search.adapters.store import InMemoryKeyValueStore


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Pin settings-related environment variables for each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def sample_recordings():
    return [
        {
            "id": "rec-1",
            "title": "Quran Recitation Lesson",
            "description": "Tajweed rules for beginners",
            "tags": ["quran", "tajweed"],
            "subject": "quran",
            "duration": 45,
            "teacher": {"name": "Ustadh Kareem"},
        },
        {
            "id": "rec-2",
            "title": "Arabic Grammar Review",
            "description": "Verb conjugation practice",
            "tags": ["arabic", "grammar"],
            "subject": "arabic",
            "duration": 30,
            "teacher": {"name": "Ustadha Maryam"},
        },
        {
            "id": "rec-3",
            "title": "Islamic History",
            "description": "Early caliphate overview",
            "tags": ["history"],
            "subject": "islamic-studies",
            "duration": 60,
            "teacher": {"name": "Ustadh Kareem"},
        },
    ]


@pytest.fixture
def sample_notes():
    return [
        {
            "id": "note-1",
            "title": "Arabic Grammar Basics",
            "content": "Nouns, verbs and particles",
            "summary": "Parts of speech",
            "tags": ["grammar", "arabic"],
            "subject": "arabic",
            "status": 50,
        },
        {
            "id": "note-2",
            "title": "Quran Tafsir",
            "content": "Commentary on Surah Al-Fatiha",
            "summary": "Meaning of the opening chapter",
            "tags": ["quran", "tafsir"],
            "subject": "quran",
            "status": 70,
        },
        {
            "id": "note-3",
            "title": "Grammar Exercises",
            "content": "Practice sentences with answers",
            "summary": "Drills",
            "tags": ["grammar"],
            "subject": "arabic",
            "status": 90,
        },
    ]


@pytest.fixture
def sample_exercises():
    return [
        {
            "id": "ex-1",
            "title": "Grammar Quiz",
            "description": "Identify the verb in each sentence",
            "tags": ["grammar", "quiz"],
            "difficulty": "easy",
        },
        {
            "id": "ex-2",
            "title": "Tajweed Drill",
            "description": "Practice elongation rules",
            "tags": ["quran", "tajweed"],
            "difficulty": "medium",
        },
    ]


@pytest.fixture
def portal_store(sample_recordings, sample_notes, sample_exercises):
    """In-memory store seeded with every collection."""
    return InMemoryKeyValueStore(
        {
            "recordings": sample_recordings,
            "notes": sample_notes,
            "exercises": sample_exercises,
        }
    )
