import uuid

import pytest

from quickpoll.errors import Forbidden, NotFound, ValidationFailed


def _question_with_options(service, *texts):
    question = service.create_question("Pick one")
    options = [service.attach_option(question.id, text) for text in texts]
    return question, options


class TestCreateQuestion:
    def test_title_is_trimmed(self, any_service):
        question = any_service.create_question("  Lunch?  ")
        assert question.title == "Lunch?"
        assert question.option_ids == []

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_empty_title_rejected(self, any_service, title):
        with pytest.raises(ValidationFailed):
            any_service.create_question(title)


class TestAttachOption:
    def test_option_starts_with_zero_votes_and_a_vote_link(self, any_service):
        question, (option,) = _question_with_options(any_service, "A")
        assert option.votes == 0
        assert option.link_to_vote == f"http://polls.test/options/{option.id}/add_vote"

    def test_reference_appended_in_order(self, any_service):
        question, options = _question_with_options(any_service, "A", "B", "C")
        stored = any_service.get_question(question.id)
        assert stored.option_ids == [o.id for o in options]
        assert [o.text for o in stored.options] == ["A", "B", "C"]

    def test_unknown_question(self, any_service):
        with pytest.raises(NotFound):
            any_service.attach_option(uuid.uuid4(), "A")

    def test_empty_text_rejected_before_lookup(self, any_service):
        with pytest.raises(ValidationFailed):
            any_service.attach_option(uuid.uuid4(), " ")

    def test_malformed_question_id(self, any_service):
        with pytest.raises(ValidationFailed) as exc:
            any_service.attach_option("not-a-uuid", "A")
        assert exc.value.message == "Invalid question ID format"


class TestCastVote:
    def test_increments_by_one(self, any_service):
        _, (option,) = _question_with_options(any_service, "A")
        any_service.cast_vote(option.id)
        updated = any_service.cast_vote(str(option.id))
        assert updated.votes == 2

    def test_unknown_option(self, any_service):
        with pytest.raises(NotFound):
            any_service.cast_vote(uuid.uuid4())


class TestDeleteOption:
    def test_zero_votes_removes_option_and_reference(self, any_service):
        question, (a, b) = _question_with_options(any_service, "A", "B")
        result = any_service.delete_option(a.id)
        assert result.orphan is False
        assert result.option.id == a.id
        assert any_service.store.find_option(a.id) is None
        assert any_service.get_question(question.id).option_ids == [b.id]

    def test_voted_option_is_forbidden_and_untouched(self, any_service):
        question, (a,) = _question_with_options(any_service, "A")
        any_service.cast_vote(a.id)
        with pytest.raises(Forbidden):
            any_service.delete_option(a.id)
        assert any_service.store.find_option(a.id).votes == 1
        assert any_service.get_question(question.id).option_ids == [a.id]

    def test_orphan_is_deleted_anyway(self, any_service):
        orphan = any_service.store.create_option("stray")
        result = any_service.delete_option(orphan.id)
        assert result.orphan is True
        assert any_service.store.find_option(orphan.id) is None

    def test_nonexistent_option(self, any_service):
        with pytest.raises(NotFound):
            any_service.delete_option(uuid.uuid4())


class TestDeleteQuestion:
    def test_removes_question_and_all_options(self, any_service):
        question, options = _question_with_options(any_service, "A", "B")
        deleted = any_service.delete_question(question.id)
        assert deleted.id == question.id
        assert any_service.store.find_question(question.id) is None
        assert any_service.store.find_options([o.id for o in options]) == []

    def test_question_without_options(self, any_service):
        question = any_service.create_question("Empty")
        any_service.delete_question(question.id)
        assert any_service.store.find_question(question.id) is None

    def test_any_voted_option_blocks_everything(self, any_service):
        question, (a, b) = _question_with_options(any_service, "A", "B")
        any_service.cast_vote(b.id)
        with pytest.raises(Forbidden) as exc:
            any_service.delete_question(question.id)
        assert exc.value.details == {"options_with_votes": [str(b.id)]}
        assert any_service.store.find_question(question.id).option_ids == [a.id, b.id]
        assert len(any_service.store.find_options([a.id, b.id])) == 2

    def test_dangling_reference_does_not_block(self, any_service):
        question, (a,) = _question_with_options(any_service, "A")
        # Simulate drift: the option vanished but the reference stayed
        any_service.store.delete_option(a.id)
        any_service.delete_question(question.id)
        assert any_service.store.find_question(question.id) is None

    def test_unknown_question(self, any_service):
        with pytest.raises(NotFound):
            any_service.delete_question(uuid.uuid4())


def test_pick_one_scenario(any_service):
    question, (a, b) = _question_with_options(any_service, "A", "B")
    any_service.cast_vote(a.id)

    with pytest.raises(Forbidden):
        any_service.delete_question(question.id)

    any_service.delete_option(b.id)
    remaining = any_service.get_question(question.id)
    assert remaining.option_ids == [a.id]
    assert [o.text for o in remaining.options] == ["A"]


def test_list_questions_resolves_options(any_service):
    first, _ = _question_with_options(any_service, "A")
    second = any_service.create_question("Second")
    listed = any_service.list_questions()
    by_id = {q.id: q for q in listed}
    assert set(by_id) == {first.id, second.id}
    assert [o.text for o in by_id[first.id].options] == ["A"]
    assert by_id[second.id].options == []


def test_get_question_rederives_links(any_service):
    question, (a,) = _question_with_options(any_service, "A")
    view = any_service.get_question(question.id, link_base="http://example.org/")
    assert view.options[0].link_to_vote == f"http://example.org/options/{a.id}/add_vote"
    # the stored link is unchanged
    assert any_service.store.find_option(a.id).link_to_vote.startswith("http://polls.test/")
