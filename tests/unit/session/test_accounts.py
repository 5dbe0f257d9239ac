"""Unit tests for AccountCreator."""

import logging

import pytest

from campushub.exceptions import ServiceError, ValidationError
from campushub.identity import AuthError
from campushub.session import AccountCreator
from campushub.store import ApprovalStatus, Role


@pytest.fixture
def accounts(identity, profiles) -> AccountCreator:
    return AccountCreator(identity, profiles)


@pytest.mark.unit
class TestCreate:
    """Tests for AccountCreator.create."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("role", "approval"),
        [
            (Role.STUDENT, ApprovalStatus.NONE),
            (Role.ORGANIZER, ApprovalStatus.PENDING),
            (Role.ADMIN, ApprovalStatus.NONE),
        ],
    )
    async def test_initial_approval(
        self, accounts: AccountCreator, profiles, role: Role, approval: ApprovalStatus
    ) -> None:
        profile = await accounts.create("a@x.com", "secret1", role, "A")

        assert profile.profile_role == role
        assert profile.profile_approval == approval
        assert profiles.profiles[profile.id] is profile

    @pytest.mark.asyncio
    async def test_profile_shares_identity_id(self, accounts: AccountCreator, identity) -> None:
        profile = await accounts.create("a@x.com", "secret1", "student", "A")

        assert identity.accounts["a@x.com"][0] == profile.id

    @pytest.mark.asyncio
    async def test_sign_up_refused(self, accounts: AccountCreator, identity, profiles) -> None:
        identity.add_account("a@x.com")

        with pytest.raises(AuthError):
            await accounts.create("a@x.com", "secret1", "student", "A")

        assert profiles.profiles == {}
        assert "delete_identity" not in identity.calls

    @pytest.mark.asyncio
    async def test_insert_failure_deletes_identity(
        self, accounts: AccountCreator, identity, profiles
    ) -> None:
        profiles.fail_insert = ServiceError("db down")

        with pytest.raises(ServiceError, match="db down"):
            await accounts.create("a@x.com", "secret1", "student", "A")

        assert identity.calls == ["sign_up", "delete_identity"]
        assert identity.accounts == {}

    @pytest.mark.asyncio
    async def test_failed_cleanup_is_logged(
        self, accounts: AccountCreator, identity, profiles, caplog: pytest.LogCaptureFixture
    ) -> None:
        profiles.fail_insert = ServiceError("db down")
        identity.fail_delete = True

        with caplog.at_level(logging.ERROR, logger="campushub.session.accounts"):
            with pytest.raises(ServiceError, match="db down"):
                await accounts.create("a@x.com", "secret1", "student", "A")

        assert "Could not remove orphaned identity" in caplog.text
        assert "a@x.com" in identity.accounts

    @pytest.mark.asyncio
    async def test_existing_profile_keeps_identity(
        self, accounts: AccountCreator, identity, profiles
    ) -> None:
        profiles.fail_insert = ValidationError({"email": "An account already exists"})

        with pytest.raises(ValidationError):
            await accounts.create("a@x.com", "secret1", "student", "A")

        assert "delete_identity" not in identity.calls
        assert "a@x.com" in identity.accounts
