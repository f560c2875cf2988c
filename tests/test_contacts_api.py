"""Tests for contact endpoints"""

import pytest
from httpx import AsyncClient
from fastapi import status
from sqlalchemy import select

from fieldops.models import Board, Contact, Photo

from conftest import login_as


async def add_contact(db_session, creator, **kwargs):
    contact = Contact(first_name=kwargs.pop("first_name", "Cleo"), created_by=creator.id, **kwargs)
    db_session.add(contact)
    await db_session.commit()
    return contact.id


@pytest.mark.asyncio
class TestContacts:

    async def test_create_and_list(self, async_client: AsyncClient, sample_user):
        await login_as(async_client, sample_user)

        response = await async_client.post(
            "/api/v1/contacts",
            json={"first_name": "Cleo", "last_name": "Client", "phone": "555-0100", "company": "Acme"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["created_by"] == str(sample_user.id)

        response = await async_client.get("/api/v1/contacts")
        assert [c["company"] for c in response.json()] == ["Acme"]

    async def test_first_name_required(self, async_client: AsyncClient, sample_user):
        await login_as(async_client, sample_user)

        response = await async_client.post("/api/v1/contacts", json={"last_name": "Nameless"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_detail_includes_photos(self, async_client: AsyncClient, db_session, sample_user):
        contact_id = await add_contact(db_session, sample_user)
        db_session.add(Photo(user_id=sample_user.id, contact_id=contact_id,
                             url="https://cdn.example.com/c.jpg", file_type="image", is_locked=False))
        await db_session.commit()
        await login_as(async_client, sample_user)

        response = await async_client.get(f"/api/v1/contacts/{contact_id}")

        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()["photos"]) == 1

    async def test_detail_hides_private_board_photos(
        self, async_client: AsyncClient, db_session, admin_user, sample_user
    ):
        contact_id = await add_contact(db_session, sample_user)
        board = Board(name="Admins", type="group", created_by=admin_user.id, allow_user_editing=False)
        db_session.add(board)
        await db_session.flush()
        db_session.add_all([
            Photo(user_id=admin_user.id, contact_id=contact_id, board_id=board.id,
                  url="https://cdn.example.com/secret.jpg", file_type="image", is_locked=False),
            Photo(user_id=admin_user.id, contact_id=contact_id,
                  url="https://cdn.example.com/open.jpg", file_type="image", is_locked=False),
        ])
        await db_session.commit()

        await login_as(async_client, sample_user)
        response = await async_client.get(f"/api/v1/contacts/{contact_id}")
        assert [p["url"] for p in response.json()["photos"]] == ["https://cdn.example.com/open.jpg"]

        await login_as(async_client, admin_user)
        response = await async_client.get(f"/api/v1/contacts/{contact_id}")
        assert len(response.json()["photos"]) == 2

    async def test_creator_updates(self, async_client: AsyncClient, db_session, sample_user):
        contact_id = await add_contact(db_session, sample_user)
        await login_as(async_client, sample_user)

        response = await async_client.put(
            f"/api/v1/contacts/{contact_id}", json={"notes": "Prefers mornings", "first_name": None}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["notes"] == "Prefers mornings"
        assert response.json()["first_name"] == "Cleo"

    async def test_other_user_cannot_modify(self, async_client: AsyncClient, db_session, sample_user, other_user):
        contact_id = await add_contact(db_session, sample_user)
        await login_as(async_client, other_user)

        response = await async_client.put(f"/api/v1/contacts/{contact_id}", json={"notes": "Mine"})
        assert response.status_code == status.HTTP_403_FORBIDDEN

        response = await async_client.delete(f"/api/v1/contacts/{contact_id}")
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_admin_deletes_and_photos_detach(
        self, async_client: AsyncClient, db_session, admin_user, sample_user
    ):
        contact_id = await add_contact(db_session, sample_user)
        photo = Photo(user_id=sample_user.id, contact_id=contact_id,
                      url="https://cdn.example.com/c.jpg", file_type="image", is_locked=False)
        db_session.add(photo)
        await db_session.commit()
        photo_id = photo.id
        await login_as(async_client, admin_user)

        response = await async_client.delete(f"/api/v1/contacts/{contact_id}")

        assert response.status_code == status.HTTP_200_OK
        result = await db_session.execute(select(Contact.id).where(Contact.id == contact_id))
        assert result.scalar_one_or_none() is None
        result = await db_session.execute(select(Photo.contact_id).where(Photo.id == photo_id))
        assert result.scalar_one() is None

    async def test_missing_contact(self, async_client: AsyncClient, sample_user):
        await login_as(async_client, sample_user)

        response = await async_client.get("/api/v1/contacts/00000000-0000-0000-0000-000000000000")

        assert response.status_code == status.HTTP_404_NOT_FOUND
