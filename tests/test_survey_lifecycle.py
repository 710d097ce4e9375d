import pytest

from app.exceptions import InvalidState, NotFound, Unauthorized
from app.schemas import SurveyUpdate
from tests.conftest import coffee_question


async def test_create_is_active_without_questions(lifecycle):
    survey = await lifecycle.create("Coffee Survey", None, "alice")

    assert survey.is_active is True
    assert survey.status == "published"
    assert survey.created_by == "alice"
    assert survey.questions == []


async def test_publish_without_questions_fails(lifecycle):
    survey = await lifecycle.create("Empty", None, "alice")

    with pytest.raises(InvalidState, match="without questions"):
        await lifecycle.publish(survey.id, "alice")


async def test_publish_with_question_reactivates_deleted_survey(lifecycle, editor):
    survey = await lifecycle.create("Coffee Survey", None, "alice")
    await editor.add_question(survey.id, coffee_question(), "alice")
    await lifecycle.soft_delete(survey.id, "alice")
    assert (await lifecycle.get(survey.id)).is_active is False

    published = await lifecycle.publish(survey.id, "alice")

    assert published.is_active is True
    assert len(published.questions) == 1


async def test_soft_delete_keeps_row(lifecycle):
    survey = await lifecycle.create("Coffee Survey", None, "alice")

    await lifecycle.soft_delete(survey.id, "alice")

    stored = await lifecycle.get(survey.id)
    assert stored.status == "archived"
    assert stored.is_active is False
    assert [s.id for s in await lifecycle.list_owned_by("alice")] == [survey.id]
    assert await lifecycle.list_public() == []


async def test_update_applies_only_given_fields(lifecycle):
    survey = await lifecycle.create("Coffee Survey", "Original", "alice")

    updated = await lifecycle.update(survey.id, SurveyUpdate(title="Tea Survey"), "alice")

    assert updated.title == "Tea Survey"
    assert updated.description == "Original"
    assert updated.is_active is True


async def test_update_is_active_applied_verbatim(lifecycle):
    survey = await lifecycle.create("Coffee Survey", None, "alice")

    hidden = await lifecycle.update(survey.id, SurveyUpdate(is_active=False), "alice")
    assert hidden.is_active is False
    assert hidden.status == "draft"

    shown = await lifecycle.update(survey.id, SurveyUpdate(is_active=True), "alice")
    assert shown.is_active is True


async def test_unpublish_then_unpublish_again_fails(lifecycle):
    survey = await lifecycle.create("Coffee Survey", None, "alice")

    draft = await lifecycle.unpublish(survey.id, "alice")
    assert draft.status == "draft"

    with pytest.raises(InvalidState, match="from draft to draft"):
        await lifecycle.unpublish(survey.id, "alice")


async def test_archived_survey_cannot_be_unpublished(lifecycle):
    survey = await lifecycle.create("Coffee Survey", None, "alice")
    await lifecycle.soft_delete(survey.id, "alice")

    with pytest.raises(InvalidState, match="from archived to draft"):
        await lifecycle.unpublish(survey.id, "alice")

    assert (await lifecycle.get(survey.id)).status == "archived"


async def test_missing_survey_is_not_found(lifecycle):
    with pytest.raises(NotFound):
        await lifecycle.update(999, SurveyUpdate(title="x"), "alice")
    with pytest.raises(NotFound):
        await lifecycle.publish(999, "alice")
    with pytest.raises(NotFound):
        await lifecycle.get(999)


async def test_other_principal_is_rejected(lifecycle, editor):
    survey = await lifecycle.create("Coffee Survey", None, "alice")
    await editor.add_question(survey.id, coffee_question(), "alice")

    with pytest.raises(Unauthorized):
        await lifecycle.update(survey.id, SurveyUpdate(title="Hijacked"), "bob")
    with pytest.raises(Unauthorized):
        await lifecycle.soft_delete(survey.id, "bob")
    with pytest.raises(Unauthorized):
        await lifecycle.publish(survey.id, "bob")
    with pytest.raises(Unauthorized):
        await lifecycle.unpublish(survey.id, "bob")
    with pytest.raises(Unauthorized):
        await lifecycle.stats(survey.id, "bob")

    assert (await lifecycle.get(survey.id)).title == "Coffee Survey"


async def test_owner_match_is_exact(lifecycle):
    survey = await lifecycle.create("Coffee Survey", None, "alice")

    with pytest.raises(Unauthorized):
        await lifecycle.soft_delete(survey.id, "Alice")


async def test_lists_are_newest_first(lifecycle):
    first = await lifecycle.create("First", None, "alice")
    second = await lifecycle.create("Second", None, "alice")
    other = await lifecycle.create("Bob's", None, "bob")
    await lifecycle.soft_delete(first.id, "alice")

    assert [s.id for s in await lifecycle.list_owned_by("alice")] == [second.id, first.id]
    assert [s.id for s in await lifecycle.list_public()] == [other.id, second.id]
    assert await lifecycle.count_owned_by("alice") == 2
    assert await lifecycle.count_owned_by("carol") == 0


async def test_get_active_hides_inactive_survey(lifecycle):
    survey = await lifecycle.create("Coffee Survey", None, "alice")
    assert (await lifecycle.get_active(survey.id)).id == survey.id

    await lifecycle.soft_delete(survey.id, "alice")

    with pytest.raises(NotFound):
        await lifecycle.get_active(survey.id)


async def test_stats_counts_questions_and_responses(lifecycle, collector, coffee_survey):
    survey, question = coffee_survey
    await collector.submit(survey.id, "bob@x.com", [])
    await collector.submit(survey.id, "carol@x.com", [])

    stats = await lifecycle.stats(survey.id, "alice")

    assert stats.survey_title == "Coffee Survey"
    assert stats.total_questions == 1
    assert stats.total_responses == 2
    assert stats.is_active is True
