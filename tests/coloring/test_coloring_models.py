"""Tests for coloring book data models."""

import pytest

from dreamcolor.coloring.models import (
    ChatConversation,
    ChatRole,
    ColoringPage,
    GenerationSession,
    PageStatus,
    WorkflowStep,
)
from dreamcolor.exceptions import InvalidTransitionError


class TestColoringPageTransitions:
    """Page statuses only move forward."""

    def test_new_page_is_pending(self):
        page = ColoringPage(id="0", prompt="A castle")
        assert page.status == PageStatus.PENDING
        assert page.image_url == ""

    def test_pending_to_generating_to_completed(self):
        page = ColoringPage(id="0", prompt="A castle")
        page.transition(PageStatus.GENERATING)
        page.transition(PageStatus.COMPLETED, image_url="data:image/jpeg;base64,AAAA")

        assert page.status == PageStatus.COMPLETED
        assert page.image_url == "data:image/jpeg;base64,AAAA"

    def test_generating_to_failed(self):
        page = ColoringPage(id="0", prompt="A castle")
        page.transition(PageStatus.GENERATING)
        page.transition(PageStatus.FAILED)

        assert page.status == PageStatus.FAILED

    @pytest.mark.parametrize("start,target", [
        (PageStatus.PENDING, PageStatus.COMPLETED),
        (PageStatus.PENDING, PageStatus.FAILED),
        (PageStatus.GENERATING, PageStatus.PENDING),
        (PageStatus.COMPLETED, PageStatus.GENERATING),
        (PageStatus.FAILED, PageStatus.GENERATING),
        (PageStatus.FAILED, PageStatus.COMPLETED),
    ])
    def test_illegal_transitions_raise(self, start, target):
        page = ColoringPage(id="0", prompt="A castle", status=start)

        with pytest.raises(InvalidTransitionError):
            page.transition(target)

        assert page.status == start


class TestGenerationSession:
    """Session workflow steps."""

    def test_new_session_is_input_step(self):
        session = GenerationSession()
        assert session.current_step == WorkflowStep.INPUT
        assert session.is_generating is False
        assert session.pages == []
        assert session.error is None

    def test_begin_clears_previous_state(self):
        session = GenerationSession(error="old error")
        session.load_pages(["old"])

        session.begin("Space Dinosaurs")

        assert session.theme == "Space Dinosaurs"
        assert session.pages == []
        assert session.error is None
        assert session.is_generating is True
        assert session.current_step == WorkflowStep.GENERATING

    def test_begin_twice_raises(self):
        session = GenerationSession()
        session.begin("Cats")

        with pytest.raises(InvalidTransitionError):
            session.begin("Dogs")

    def test_load_pages_creates_pending_pages_in_order(self):
        session = GenerationSession()
        session.load_pages(["first", "second"])

        assert [p.id for p in session.pages] == ["0", "1"]
        assert [p.prompt for p in session.pages] == ["first", "second"]
        assert all(p.status == PageStatus.PENDING for p in session.pages)

    def test_finish_moves_to_results(self):
        session = GenerationSession()
        session.begin("Cats")
        session.finish()

        assert session.current_step == WorkflowStep.RESULTS
        assert session.is_generating is False

    def test_fail_rolls_back_to_input(self):
        session = GenerationSession()
        session.begin("Cats")
        session.fail("Something broke")

        assert session.current_step == WorkflowStep.INPUT
        assert session.is_generating is False
        assert session.error == "Something broke"
        assert session.theme == "Cats"

    def test_dismiss_error_keeps_theme_and_pages(self):
        session = GenerationSession(theme="Cats", error="Something broke")
        session.load_pages(["a", "b"])
        pages_before = [p.model_copy() for p in session.pages]

        session.dismiss_error()

        assert session.error is None
        assert session.theme == "Cats"
        assert session.pages == pages_before

    def test_reset(self):
        session = GenerationSession()
        session.begin("Cats")
        session.load_pages(["a"])
        session.finish()

        session.reset()

        assert session.model_dump() == GenerationSession().model_dump()

    def test_progress_counts(self):
        session = GenerationSession()
        session.load_pages(["a", "b", "c", "d"])
        session.pages[0].transition(PageStatus.GENERATING)
        session.pages[0].transition(PageStatus.COMPLETED)
        session.pages[1].transition(PageStatus.GENERATING)
        session.pages[1].transition(PageStatus.FAILED)

        assert session.completed_count == 1
        assert session.failed_count == 1
        assert session.progress_percent == 25.0

    def test_progress_without_pages(self):
        assert GenerationSession().progress_percent == 0.0


class TestChatConversation:
    """Chat transcript."""

    def test_append_keeps_order_and_roles(self):
        conversation = ChatConversation()
        first = conversation.append(ChatRole.USER, "hi")
        second = conversation.append(ChatRole.ASSISTANT, "hello")

        assert conversation.messages == [first, second]
        assert first.id != second.id
        assert first.timestamp <= second.timestamp

    def test_provider_roles(self):
        assert ChatRole.USER.provider_role == "user"
        assert ChatRole.ASSISTANT.provider_role == "model"
