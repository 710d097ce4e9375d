import pytest

from app.crud import crud_response
from app.exceptions import Conflict, InvalidOrExpired, NotFound, Unauthorized
from app.schemas import AnswerCreate
from tests.conftest import coffee_question


async def test_coffee_survey_end_to_end(lifecycle, editor, tokens, collector):
    survey = await lifecycle.create("Coffee Survey", None, "alice")
    question = await editor.add_question(survey.id, coffee_question(), "alice")
    await lifecycle.publish(survey.id, "alice")
    issued = await tokens.issue(survey.id, "alice")
    yes = next(o for o in question.options if o.option_text == "Yes")
    answers = [AnswerCreate(question_id=question.id, selected_option_ids=[yes.id])]

    response = await collector.submit_via_token(issued.token, "bob@x.com", answers)

    assert response.survey_id == survey.id
    assert len(response.answers) == 1
    assert response.answers[0].selected_option_ids == [yes.id]
    assert response.answers[0].answer_text is None

    with pytest.raises(Conflict):
        await collector.submit_via_token(issued.token, "bob@x.com", answers)
    assert await collector.count(survey.id) == 1


async def test_duplicate_email_conflicts_regardless_of_answers(collector, coffee_survey):
    survey, question = coffee_survey
    await collector.submit(survey.id, "bob@x.com", [])

    with pytest.raises(Conflict):
        await collector.submit(
            survey.id,
            "bob@x.com",
            [AnswerCreate(question_id=question.id, answer_text="different")],
        )


async def test_same_email_may_answer_other_surveys(lifecycle, collector, coffee_survey):
    survey, _ = coffee_survey
    other = await lifecycle.create("Tea Survey", None, "alice")

    await collector.submit(survey.id, "bob@x.com", [])
    await collector.submit(other.id, "bob@x.com", [])

    assert await collector.count(survey.id) == 1
    assert await collector.count(other.id) == 1


async def test_inactive_and_missing_surveys_reject_identically(lifecycle, collector, coffee_survey):
    survey, _ = coffee_survey
    await lifecycle.soft_delete(survey.id, "alice")

    with pytest.raises(NotFound) as inactive:
        await collector.submit(survey.id, "bob@x.com", [])
    with pytest.raises(NotFound) as missing:
        await collector.submit(999, "bob@x.com", [])

    assert inactive.value.message == missing.value.message


async def test_invalid_token_rejects_submission(collector):
    with pytest.raises(InvalidOrExpired):
        await collector.submit_via_token("nope", "bob@x.com", [])


async def test_unknown_questions_are_dropped(lifecycle, editor, collector, coffee_survey):
    survey, question = coffee_survey
    other = await lifecycle.create("Tea Survey", None, "alice")
    foreign = await editor.add_question(other.id, coffee_question(), "alice")

    response = await collector.submit(
        survey.id,
        "bob@x.com",
        [
            AnswerCreate(question_id=question.id, answer_text="Every day"),
            AnswerCreate(question_id=4242, answer_text="ghost"),
            AnswerCreate(question_id=foreign.id, answer_text="wrong survey"),
        ],
    )

    assert [a.answer_text for a in response.answers] == ["Every day"]


async def test_free_text_and_empty_selection(collector, coffee_survey, session):
    survey, question = coffee_survey

    response = await collector.submit(
        survey.id,
        "bob@x.com",
        [AnswerCreate(question_id=question.id, answer_text="  as is  ", selected_option_ids=[])],
    )

    (answer,) = await crud_response.list_answers_by_question(session, question.id)
    assert answer.selected_options is None
    assert answer.answer_text == "  as is  "
    assert response.answers[0].selected_option_ids == []


async def test_multi_select_is_stored_comma_joined(collector, coffee_survey, session):
    survey, question = coffee_survey
    ids = [o.id for o in reversed(question.options)]

    await collector.submit(
        survey.id, "bob@x.com", [AnswerCreate(question_id=question.id, selected_option_ids=ids)]
    )

    (answer,) = await crud_response.list_answers_by_question(session, question.id)
    assert answer.selected_options == ",".join(str(i) for i in ids)


async def test_store_uniqueness_backs_duplicate_check(collector, coffee_survey, monkeypatch):
    survey, _ = coffee_survey
    await collector.submit(survey.id, "bob@x.com", [])

    async def never_exists(db, survey_id, respondent_email):
        return False

    monkeypatch.setattr(crud_response, "response_exists", never_exists)

    with pytest.raises(Conflict):
        await collector.submit(survey.id, "bob@x.com", [])


async def test_owner_reads(collector, coffee_survey):
    survey, question = coffee_survey
    first = await collector.submit(
        survey.id, "bob@x.com", [AnswerCreate(question_id=question.id, answer_text="a")]
    )
    second = await collector.submit(
        survey.id, "carol@x.com", [AnswerCreate(question_id=question.id, answer_text="b")]
    )

    listed = await collector.list_by_survey(survey.id, "alice")
    assert [r.id for r in listed] == [second.id, first.id]

    fetched = await collector.get_by_id(first.id, "alice")
    assert fetched.respondent_email == "bob@x.com"

    answers = await collector.answers_for_question(question.id, "alice")
    assert sorted(a.answer_text for a in answers) == ["a", "b"]


async def test_get_by_id_missing_versus_unauthorized(collector, coffee_survey):
    survey, _ = coffee_survey
    response = await collector.submit(survey.id, "bob@x.com", [])

    assert await collector.get_by_id(999, "alice") is None
    with pytest.raises(Unauthorized):
        await collector.get_by_id(response.id, "bob")


async def test_owner_only_reads_reject_others(collector, coffee_survey):
    survey, question = coffee_survey

    with pytest.raises(Unauthorized):
        await collector.list_by_survey(survey.id, "bob")
    with pytest.raises(Unauthorized):
        await collector.answers_for_question(question.id, "bob")
    with pytest.raises(NotFound):
        await collector.answers_for_question(999, "alice")


async def test_count_is_public(collector, coffee_survey):
    survey, _ = coffee_survey
    assert await collector.count(survey.id) == 0
    await collector.submit(survey.id, "bob@x.com", [])
    assert await collector.count(survey.id) == 1
