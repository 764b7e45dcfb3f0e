"""Unit tests for business rule validators and the validator pipeline."""

from unittest.mock import AsyncMock

import pytest

from usermanagement.core.outcome import ErrorCode, Outcome
from usermanagement.domain.entities import Account
from usermanagement.domain.repositories import AccountRepository
from usermanagement.domain.services.account_validators import (
    AccountValidator,
    UniqueEmailRule,
    UniquePhoneRule,
    ValidatorPipeline,
    conflict_outcome,
)


@pytest.fixture
def mock_repository():
    """Mock account repository with no existing accounts."""
    repository = AsyncMock(spec=AccountRepository)
    repository.exists_by_email.return_value = False
    repository.exists_by_phone.return_value = False
    return repository


def make_candidate(**overrides) -> Account:
    fields = {"email": "a@x.com", "first_name": "A", "last_name": "B"}
    fields.update(overrides)
    return Account(**fields)


class RecordingValidator(AccountValidator):
    """Validator returning a fixed outcome and recording its calls."""

    def __init__(self, outcome: Outcome) -> None:
        self.outcome = outcome
        self.calls = 0

    async def evaluate(self, candidate, current=None):
        self.calls += 1
        return self.outcome


class TestUniqueEmailRule:
    """Tests for email uniqueness."""

    @pytest.mark.asyncio
    async def test_passes_when_email_free(self, mock_repository):
        outcome = await UniqueEmailRule(mock_repository).evaluate(make_candidate())

        assert outcome.is_success
        mock_repository.exists_by_email.assert_awaited_once_with("a@x.com", exclude_id=None)

    @pytest.mark.asyncio
    async def test_fails_when_email_taken(self, mock_repository):
        mock_repository.exists_by_email.return_value = True

        outcome = await UniqueEmailRule(mock_repository).evaluate(make_candidate())

        assert not outcome.is_success
        assert outcome.code == ErrorCode.EMAIL_ALREADY_EXISTS
        assert outcome.message == "Email already exists"
        assert "already registered" in outcome.errors[0]

    @pytest.mark.asyncio
    async def test_excludes_candidate_itself(self, mock_repository):
        await UniqueEmailRule(mock_repository).evaluate(make_candidate(id="acc_1"))

        mock_repository.exists_by_email.assert_awaited_once_with("a@x.com", exclude_id="acc_1")


class TestUniquePhoneRule:
    """Tests for sparse phone uniqueness."""

    @pytest.mark.asyncio
    async def test_absent_phone_is_not_looked_up(self, mock_repository):
        outcome = await UniquePhoneRule(mock_repository).evaluate(make_candidate())

        assert outcome.is_success
        mock_repository.exists_by_phone.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fails_when_phone_taken(self, mock_repository):
        mock_repository.exists_by_phone.return_value = True

        outcome = await UniquePhoneRule(mock_repository).evaluate(
            make_candidate(phone_number="+15551234567")
        )

        assert outcome.code == ErrorCode.PHONE_ALREADY_EXISTS
        assert outcome.errors == ("A user with this phone number is already registered",)

    @pytest.mark.asyncio
    async def test_unchanged_phone_is_not_looked_up(self, mock_repository):
        current = make_candidate(id="acc_1", phone_number="+15551234567")
        candidate = make_candidate(id="acc_1", phone_number="+15551234567", first_name="Z")

        outcome = await UniquePhoneRule(mock_repository).evaluate(candidate, current)

        assert outcome.is_success
        mock_repository.exists_by_phone.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_changed_phone_is_looked_up_excluding_self(self, mock_repository):
        current = make_candidate(id="acc_1", phone_number="+15551234567")
        candidate = make_candidate(id="acc_1", phone_number="+15559999999")

        await UniquePhoneRule(mock_repository).evaluate(candidate, current)

        mock_repository.exists_by_phone.assert_awaited_once_with(
            "+15559999999", exclude_id="acc_1"
        )


class TestValidatorPipeline:
    """Tests for ordered, short-circuiting evaluation."""

    @pytest.mark.asyncio
    async def test_empty_pipeline_succeeds(self):
        outcome = await ValidatorPipeline().run(make_candidate())

        assert outcome.is_success

    @pytest.mark.asyncio
    async def test_all_validators_run_when_passing(self):
        first = RecordingValidator(Outcome.success())
        second = RecordingValidator(Outcome.success())

        outcome = await ValidatorPipeline([first, second]).run(make_candidate())

        assert outcome.is_success
        assert (first.calls, second.calls) == (1, 1)

    @pytest.mark.asyncio
    async def test_stops_at_first_failure(self):
        failure = Outcome.failure("first", ["detail"], "FIRST")
        first = RecordingValidator(failure)
        second = RecordingValidator(Outcome.failure("second", code="SECOND"))

        outcome = await ValidatorPipeline([first, second]).run(make_candidate())

        assert outcome is failure
        assert second.calls == 0

    @pytest.mark.asyncio
    async def test_email_conflict_reported_before_phone_conflict(self, mock_repository):
        mock_repository.exists_by_email.return_value = True
        mock_repository.exists_by_phone.return_value = True
        pipeline = ValidatorPipeline(
            [UniqueEmailRule(mock_repository), UniquePhoneRule(mock_repository)]
        )

        outcome = await pipeline.run(make_candidate(phone_number="+15551234567"))

        assert outcome.code == ErrorCode.EMAIL_ALREADY_EXISTS
        mock_repository.exists_by_phone.assert_not_awaited()

    def test_pipeline_is_fixed_after_construction(self):
        validators = [RecordingValidator(Outcome.success())]
        pipeline = ValidatorPipeline(validators)
        validators.append(RecordingValidator(Outcome.success()))

        assert len(pipeline) == 1
        assert isinstance(pipeline.validators, tuple)


def test_conflict_outcome_matches_rule():
    outcome = conflict_outcome("phone_number")

    assert outcome is not None
    assert outcome.code == ErrorCode.PHONE_ALREADY_EXISTS


def test_conflict_outcome_unknown_field():
    assert conflict_outcome("id") is None
