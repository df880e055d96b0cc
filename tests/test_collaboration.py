"""Tests for the collaboration graph."""

from collections import Counter
from itertools import permutations

import pytest

from app.services.collaboration_service import CollaborationService
from tests.factories import TRACK_CREDITS, make_artist, make_track, seed


def pairs(collaborators):
    return [(c.artist.name, c.collaboration_count) for c in collaborators]


async def test_collaborators_ordered_by_shared_tracks(db, catalog):
    assert pairs(await CollaborationService.collaborators(db, "a1")) == [("Beta", 3), ("Gamma", 2)]
    assert pairs(await CollaborationService.collaborators(db, "a2")) == [("Alpha", 3), ("Gamma", 1)]
    assert pairs(await CollaborationService.collaborators(db, "a3")) == [("Alpha", 2), ("Beta", 1)]


@pytest.mark.parametrize("artist_id", ["a4", "a5", "missing"])
async def test_no_collaborators(db, catalog, artist_id):
    assert await CollaborationService.collaborators(db, artist_id) == []


@pytest.mark.parametrize("artist_id", ["a1", "a2", "a3", "a4", "a5"])
async def test_counts_match_shared_tracks(db, catalog, artist_id):
    expected = Counter()
    for credited in TRACK_CREDITS.values():
        for own, other in permutations(set(credited), 2):
            if own == artist_id:
                expected[other] += 1

    result = await CollaborationService.collaborators(db, artist_id)
    assert {c.artist.id: c.collaboration_count for c in result} == dict(expected)
    assert artist_id not in [c.artist.id for c in result]


async def test_ties_ordered_by_name(session_factory):
    artists = [make_artist("x1", "Host"), make_artist("x2", "Zed"), make_artist("x3", "Amy")]
    tracks = [make_track("s1", "One"), make_track("s2", "Two")]
    async with session_factory() as session:
        await seed(session, artists, tracks=tracks, track_credits={"s1": ["x1", "x2"], "s2": ["x3", "x1"]})

    async with session_factory() as session:
        result = await CollaborationService.collaborators(session, "x1")

    assert pairs(result) == [("Amy", 1), ("Zed", 1)]
