"""Unit tests for StoreProfileRepository."""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from campushub.exceptions import ReferenceNotFoundError, ServiceError, ValidationError
from campushub.session import StoreProfileRepository
from campushub.store import ApprovalStatus, CampusStore, Profile, Role


@pytest.fixture
def repository(store: CampusStore) -> StoreProfileRepository:
    return StoreProfileRepository(store)


def _db_down() -> OperationalError:
    return OperationalError("SELECT", {}, Exception("database is locked"))


@pytest.mark.unit
class TestStoreProfileRepository:
    """Tests for the CampusStore-backed profile repository."""

    @pytest.mark.asyncio
    async def test_insert_and_get(self, repository: StoreProfileRepository) -> None:
        await repository.insert(Profile(id="p1", name="Sam", role=Role.STUDENT))

        profile = await repository.get("p1")

        assert profile is not None
        assert profile.name == "Sam"
        assert await repository.get("missing") is None

    @pytest.mark.asyncio
    async def test_insert_existing_profile(self, repository: StoreProfileRepository) -> None:
        await repository.insert(Profile(id="p1", name="Sam", role=Role.STUDENT))

        with pytest.raises(ValidationError) as exc_info:
            await repository.insert(Profile(id="p1", name="Sam again", role=Role.STUDENT))

        assert "email" in exc_info.value.errors

    @pytest.mark.asyncio
    async def test_update(self, repository: StoreProfileRepository, store: CampusStore) -> None:
        store.create_profile(
            Profile(id="o1", name="Jane", role=Role.ORGANIZER, approval_status="pending")
        )

        updated = await repository.update("o1", approval_status=ApprovalStatus.APPROVED)

        assert updated.profile_approval == ApprovalStatus.APPROVED
        assert store.get_profile("o1").profile_approval == ApprovalStatus.APPROVED

    @pytest.mark.asyncio
    async def test_update_missing(self, repository: StoreProfileRepository) -> None:
        with pytest.raises(ReferenceNotFoundError, match="Profile 'missing' not found"):
            await repository.update("missing", name="Nobody")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "call"),
        [
            ("get_profile", lambda r: r.get("p1")),
            ("create_profile", lambda r: r.insert(Profile(id="p1", name="S", role=Role.STUDENT))),
            ("update_profile", lambda r: r.update("p1", name="S")),
        ],
    )
    async def test_database_failure(
        self, repository: StoreProfileRepository, store: CampusStore, method: str, call
    ) -> None:
        with patch.object(store, method, side_effect=_db_down()):
            with pytest.raises(ServiceError):
                await call(repository)
