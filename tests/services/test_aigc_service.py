"""
AigcService tests: chat/analyze turns and message deletion.
"""

import pytest

from app.core.exceptions import InferenceError, NotFound, PermissionDenied, ValidationError
from app.models import ChatMessage
from app.services.aigc_service import AigcService


@pytest.fixture
def service(test_db_session, mock_inference):
    return AigcService(test_db_session, mock_inference)


class TestChat:

    def test_chat_stores_prompt_and_answer(self, service, mock_inference, test_db_session, documents, members):
        mock_inference.ask.return_value = "Y"

        m = service.chat(doc_id=5, prompt="What is X?", member=members["asker"], remote_addr="10.0.0.8:51000")

        mock_inference.ask.assert_called_once_with("X is Y", "What is X?", api=None)
        test_db_session.expire_all()
        stored = test_db_session.get(ChatMessage, m.message_id)
        assert stored.content == "What is X?"
        assert stored.response == "Y"
        assert stored.book_id == 2
        assert stored.member_id == 9
        assert stored.author == "Ask Er"
        assert stored.ip_address == "10.0.0.8"

    def test_author_falls_back_to_account(self, service, documents, members):
        m = service.chat(doc_id=1, prompt="hi", member=members["admin"])

        assert m.author == "admin"

    def test_non_participant_in_group_book(self, service, mock_inference, test_db_session, documents, members):
        with pytest.raises(PermissionDenied):
            service.chat(doc_id=5, prompt="What is X?", member=members["outsider"])

        assert test_db_session.query(ChatMessage).count() == 0
        mock_inference.ask.assert_not_called()

    def test_unknown_document(self, service, documents, members):
        with pytest.raises(NotFound):
            service.chat(doc_id=404, prompt="hi", member=members["asker"])

    def test_empty_prompt(self, service, mock_inference, documents, members):
        with pytest.raises(ValidationError):
            service.chat(doc_id=1, prompt="", member=members["editor"])
        mock_inference.ask.assert_not_called()

    def test_failed_inference_keeps_the_prompt(self, service, mock_inference, test_db_session, documents, members):
        mock_inference.ask.side_effect = InferenceError()

        with pytest.raises(InferenceError):
            service.chat(doc_id=1, prompt="still here?", member=members["editor"])

        test_db_session.expire_all()
        stored = test_db_session.query(ChatMessage).one()
        assert stored.content == "still here?"
        assert stored.response == ""

    def test_anonymous_chat(self, service, documents, members):
        m = service.chat(doc_id=1, prompt="hi", member=None)

        assert m.member_id == 0
        assert m.author == "[Anonymous]"


class TestAnalyze:

    def test_analyze_stores_api_as_content(self, service, mock_inference, documents, members):
        mock_inference.analyze.return_value = "a summary"

        m = service.analyze(doc_id=1, api="/api/summary", member=members["editor"])

        mock_inference.analyze.assert_called_once_with("# Intro", "/api/summary")
        assert m.content == "/api/summary"
        assert m.response == "a summary"

    def test_analyze_requires_api(self, service, mock_inference, documents, members):
        with pytest.raises(ValidationError):
            service.analyze(doc_id=1, api="", member=members["editor"])
        mock_inference.analyze.assert_not_called()

    @pytest.mark.parametrize("api", ["@evil.example/steal", "//evil.example/steal", "api/summary"])
    def test_analyze_rejects_api_outside_the_server(self, service, mock_inference, test_db_session, documents, members, api):
        with pytest.raises(ValidationError):
            service.analyze(doc_id=1, api=api, member=members["editor"])

        assert test_db_session.query(ChatMessage).count() == 0
        mock_inference.analyze.assert_not_called()

    def test_chat_rejects_api_outside_the_server(self, service, mock_inference, test_db_session, documents, members):
        with pytest.raises(ValidationError):
            service.chat(doc_id=1, prompt="hi", member=members["editor"], api="@evil.example/steal")

        assert test_db_session.query(ChatMessage).count() == 0
        mock_inference.ask.assert_not_called()


class TestDelete:

    def test_author_deletes_own_message(self, service, test_db_session, documents, members, make_messages):
        rows = make_messages(document_id=5, book_id=2, count=1, member_id=9)

        service.delete_message(rows[0].message_id, members["asker"])

        assert test_db_session.query(ChatMessage).count() == 0

    def test_founder_deletes_any_message(self, service, test_db_session, documents, members, make_messages):
        rows = make_messages(document_id=5, book_id=2, count=1, member_id=9)

        service.delete_message(rows[0].message_id, members["founder"])

        assert test_db_session.query(ChatMessage).count() == 0

    def test_editor_cannot_delete_others(self, service, test_db_session, documents, members, make_messages):
        rows = make_messages(document_id=5, book_id=2, count=1, member_id=9)

        with pytest.raises(PermissionDenied):
            service.delete_message(rows[0].message_id, members["editor"])
        assert test_db_session.query(ChatMessage).count() == 1

    def test_missing_message(self, service, members):
        with pytest.raises(NotFound):
            service.delete_message(999, members["founder"])


class TestDocumentLookup:

    def test_same_not_found_message_for_every_flow(self, service, documents, members):
        with pytest.raises(NotFound) as chat_error:
            service.chat(doc_id=404, prompt="hi", member=members["asker"])
        with pytest.raises(NotFound) as list_error:
            service.list_messages(404, 1, 10, None)

        assert chat_error.value.message == list_error.value.message
