"""Integration tests for the full social flow.

These drive the real app through HTTP against a throwaway data directory:
two people sign up, post, follow, like and comment, and the feeds agree.
"""

import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from fitfeed.web import create_app

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def app():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield create_app(data_dir=Path(tmpdir))


def sign_up(client: TestClient, name: str) -> None:
    """Sign up through the form; the client keeps the session cookie."""
    response = client.post(
        "/signup",
        data={
            "email": f"{name.lower()}@example.com",
            "password": "secret123",
            "full_name": name,
        },
        follow_redirects=False,
    )
    assert response.status_code == 302


def profile_id(client: TestClient) -> str:
    text = client.get("/profile").text
    marker = 'data-profile-id="'
    start = text.index(marker) + len(marker)
    return text[start:text.index('"', start)]


class TestSocialFlow:
    """End-to-end tests across auth, workouts, follows and feeds."""

    def test_post_follow_like_comment(self, app):
        """Test two users interacting and every feed reflecting it."""
        with TestClient(app) as alice, TestClient(app) as bob:
            sign_up(alice, "Alice")
            sign_up(bob, "Bob")
            alice_id = profile_id(alice)

            alice.post(
                "/workouts",
                data={"title": "Tempo run", "duration_minutes": "40", "visibility": "public"},
                files={"attachment": ("run.png", PNG_BYTES, "image/png")},
            )
            alice.post(
                "/workouts",
                data={"title": "Recovery swim", "visibility": "friends"},
            )

            # Bob sees only the public workout until he follows Alice
            titles = [i["title"] for i in bob.get("/api/feed").json()["items"]]
            assert titles == ["Tempo run"]
            assert bob.get("/api/feed?tab=following").json()["items"] == []

            assert bob.post(f"/profile/{alice_id}/follow").json()["following"] is True
            following = bob.get("/api/feed?tab=following").json()["items"]
            assert [i["title"] for i in following] == ["Recovery swim", "Tempo run"]

            run = following[1]
            assert bob.post(f"/workouts/{run['id']}/like").json()["like_count"] == 1
            bob.post(f"/workouts/{run['id']}/comments", data={"content": "Smooth pace"})

            # Alice's view carries Bob's engagement
            item = alice.get("/api/feed").json()["items"][1]
            assert item["id"] == run["id"]
            assert item["like_count"] == 1
            assert item["liked_by_viewer"] is False
            assert item["comment_count"] == 1

            liked = bob.get("/api/feed?tab=liked").json()["items"]
            assert [i["id"] for i in liked] == [run["id"]]

            page = alice.get(f"/workouts/{run['id']}")
            assert "Smooth pace" in page.text
            assert bob.get(f"/media/images/{run['attachment_url']}").content == PNG_BYTES

    def test_feed_pagination(self, app):
        """Test paging through more than one page of the feed."""
        with TestClient(app) as client:
            client.post(
                "/signup",
                data={"email": "pat@example.com", "password": "secret123", "full_name": "Pat"},
            )
            for i in range(30):
                client.post("/workouts", data={"title": f"Session {i}"})

            first = client.get("/api/feed").json()
            assert len(first["items"]) == 25
            assert first["next_cursor"] == 25

            second = client.get(f"/api/feed?cursor={first['next_cursor']}").json()
            assert [i["title"] for i in second["items"]] == [f"Session {i}" for i in range(4, -1, -1)]
            assert second["next_cursor"] is None
