"""Tests for chat message endpoints"""

import pytest
import pytest_asyncio
from datetime import datetime, timedelta
from httpx import AsyncClient
from fastapi import status

from fieldops.models import Board, BoardMember, Message, Photo

from conftest import login_as


@pytest_asyncio.fixture
async def crew_board(db_session, admin_user, sample_user):
    """Board with the admin (editor) and sample user (member)"""
    board = Board(name="Crew", type="group", created_by=admin_user.id, allow_user_editing=False)
    db_session.add(board)
    await db_session.flush()
    db_session.add_all([
        BoardMember(board_id=board.id, user_id=admin_user.id, can_edit=True),
        BoardMember(board_id=board.id, user_id=sample_user.id, can_edit=False),
    ])
    await db_session.commit()
    return board


@pytest.mark.asyncio
class TestBoardMessages:

    async def test_member_posts_and_reads(self, async_client: AsyncClient, sample_user, crew_board):
        await login_as(async_client, sample_user)

        for text in ("first", "second"):
            response = await async_client.post(
                "/api/v1/messages", json={"board_id": str(crew_board.id), "content": text}
            )
            assert response.status_code == status.HTTP_201_CREATED

        response = await async_client.get(f"/api/v1/boards/{crew_board.id}/messages")

        assert response.status_code == status.HTTP_200_OK
        messages = response.json()
        # Oldest first
        assert [m["content"] for m in messages] == ["first", "second"]
        assert messages[0]["sender"]["email"] == "worker@example.com"
        assert messages[0]["receiver_id"] is None

    async def test_non_member_cannot_post_or_read(self, async_client: AsyncClient, other_user, crew_board):
        await login_as(async_client, other_user)

        response = await async_client.post(
            "/api/v1/messages", json={"board_id": str(crew_board.id), "content": "hi"}
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Not a member of this board"

        response = await async_client.get(f"/api/v1/boards/{crew_board.id}/messages")
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_admin_reads_any_board(self, async_client: AsyncClient, db_session, admin_user, other_user):
        board = Board(name="Private", type="group", created_by=other_user.id, allow_user_editing=False)
        db_session.add(board)
        await db_session.commit()
        await login_as(async_client, admin_user)

        response = await async_client.get(f"/api/v1/boards/{board.id}/messages")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []

    async def test_empty_message_rejected(self, async_client: AsyncClient, sample_user, crew_board):
        await login_as(async_client, sample_user)

        response = await async_client.post(
            "/api/v1/messages", json={"board_id": str(crew_board.id), "content": "   "}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_message_needs_target(self, async_client: AsyncClient, sample_user):
        await login_as(async_client, sample_user)

        response = await async_client.post("/api/v1/messages", json={"content": "to nobody"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_unknown_photo(self, async_client: AsyncClient, sample_user, crew_board):
        await login_as(async_client, sample_user)

        response = await async_client.post(
            "/api/v1/messages",
            json={"board_id": str(crew_board.id), "photo_id": "00000000-0000-0000-0000-000000000000"},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_keeps_newest_hundred_oldest_first(
        self, async_client: AsyncClient, db_session, sample_user, crew_board
    ):
        base = datetime(2024, 3, 13, 8)
        db_session.add_all([
            Message(sender_id=sample_user.id, board_id=crew_board.id, content=f"#{i}",
                    created_at=base + timedelta(seconds=i))
            for i in range(1, 102)
        ])
        await db_session.commit()
        await login_as(async_client, sample_user)

        response = await async_client.get(f"/api/v1/boards/{crew_board.id}/messages")

        messages = response.json()
        assert len(messages) == 100
        assert messages[0]["content"] == "#2"
        assert messages[-1]["content"] == "#101"


@pytest.mark.asyncio
class TestDirectMessages:

    async def test_conversation_both_directions(self, async_client: AsyncClient, sample_user, other_user):
        await login_as(async_client, sample_user)
        await async_client.post(
            "/api/v1/messages", json={"receiver_id": str(other_user.id), "content": "ping"}
        )
        await login_as(async_client, other_user)
        await async_client.post(
            "/api/v1/messages", json={"receiver_id": str(sample_user.id), "content": "pong"}
        )

        response = await async_client.get(f"/api/v1/messages/direct/{sample_user.id}")

        assert response.status_code == status.HTTP_200_OK
        assert [m["content"] for m in response.json()] == ["ping", "pong"]

    async def test_third_party_sees_nothing(
        self, async_client: AsyncClient, admin_user, sample_user, other_user
    ):
        await login_as(async_client, sample_user)
        await async_client.post(
            "/api/v1/messages", json={"receiver_id": str(other_user.id), "content": "secret"}
        )

        await login_as(async_client, admin_user)
        response = await async_client.get(f"/api/v1/messages/direct/{sample_user.id}")

        assert response.json() == []

    async def test_message_to_self_rejected(self, async_client: AsyncClient, sample_user):
        await login_as(async_client, sample_user)

        response = await async_client.post(
            "/api/v1/messages", json={"receiver_id": str(sample_user.id), "content": "me"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_unknown_receiver(self, async_client: AsyncClient, sample_user):
        await login_as(async_client, sample_user)

        response = await async_client.post(
            "/api/v1/messages",
            json={"receiver_id": "00000000-0000-0000-0000-000000000000", "content": "hello?"},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_cannot_attach_photo_from_foreign_board(
        self, async_client: AsyncClient, db_session, admin_user, sample_user, other_user, crew_board
    ):
        photo = Photo(user_id=admin_user.id, board_id=crew_board.id,
                      url="https://cdn.example.com/secret.jpg", file_type="image", is_locked=False)
        db_session.add(photo)
        await db_session.commit()
        photo_id = photo.id

        await login_as(async_client, other_user)
        response = await async_client.post(
            "/api/v1/messages",
            json={"receiver_id": str(sample_user.id), "content": "look", "photo_id": str(photo_id)},
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["reason"] == "not_a_member"

        await login_as(async_client, sample_user)
        response = await async_client.post(
            "/api/v1/messages",
            json={"receiver_id": str(other_user.id), "content": "look", "photo_id": str(photo_id)},
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["photo"]["url"] == "https://cdn.example.com/secret.jpg"

    async def test_keeps_newest_hundred_oldest_first(
        self, async_client: AsyncClient, db_session, sample_user, other_user
    ):
        base = datetime(2024, 3, 13, 8)
        db_session.add_all([
            Message(sender_id=sample_user.id, receiver_id=other_user.id, content=f"#{i}",
                    created_at=base + timedelta(seconds=i))
            for i in range(1, 102)
        ])
        await db_session.commit()
        await login_as(async_client, other_user)

        response = await async_client.get(f"/api/v1/messages/direct/{sample_user.id}")

        messages = response.json()
        assert len(messages) == 100
        assert messages[0]["content"] == "#2"
        assert messages[-1]["content"] == "#101"


@pytest.mark.asyncio
class TestDeleteAndLock:

    async def _post(self, db_session, sender, board, locked=False):
        message = Message(sender_id=sender.id, board_id=board.id, content="note", is_locked=locked)
        db_session.add(message)
        await db_session.commit()
        return message.id

    async def test_sender_deletes_own(self, async_client: AsyncClient, db_session, sample_user, crew_board):
        message_id = await self._post(db_session, sample_user, crew_board)
        await login_as(async_client, sample_user)

        response = await async_client.delete(f"/api/v1/messages/{message_id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Message deleted"

    async def test_sender_cannot_delete_locked(
        self, async_client: AsyncClient, db_session, sample_user, crew_board
    ):
        message_id = await self._post(db_session, sample_user, crew_board, locked=True)
        await login_as(async_client, sample_user)

        response = await async_client.delete(f"/api/v1/messages/{message_id}")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["reason"] == "message_locked"

    async def test_cannot_delete_others(
        self, async_client: AsyncClient, db_session, admin_user, sample_user, crew_board
    ):
        message_id = await self._post(db_session, admin_user, crew_board)
        await login_as(async_client, sample_user)

        response = await async_client.delete(f"/api/v1/messages/{message_id}")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["reason"] == "not_owner"

    async def test_admin_deletes_locked(
        self, async_client: AsyncClient, db_session, admin_user, sample_user, crew_board
    ):
        message_id = await self._post(db_session, sample_user, crew_board, locked=True)
        await login_as(async_client, admin_user)

        response = await async_client.delete(f"/api/v1/messages/{message_id}")

        assert response.status_code == status.HTTP_200_OK

    async def test_lock_is_admin_only(
        self, async_client: AsyncClient, db_session, admin_user, sample_user, crew_board
    ):
        message_id = await self._post(db_session, sample_user, crew_board)

        await login_as(async_client, sample_user)
        response = await async_client.put(f"/api/v1/messages/{message_id}/lock", json={"is_locked": True})
        assert response.status_code == status.HTTP_403_FORBIDDEN

        await login_as(async_client, admin_user)
        response = await async_client.put(f"/api/v1/messages/{message_id}/lock", json={"is_locked": True})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["is_locked"] is True

    async def test_delete_missing_message(self, async_client: AsyncClient, sample_user):
        await login_as(async_client, sample_user)

        response = await async_client.delete("/api/v1/messages/00000000-0000-0000-0000-000000000000")

        assert response.status_code == status.HTTP_404_NOT_FOUND
