"""Unit tests for the answer resolver."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

import presenters
from bot_backend.resolver import NONE_INTENT, ReplyKind, resolve_answer, top_scoring_intent
from tests.factories import luis_result, qna_answer


class TestTopScoringIntent:
    def test_prefers_raw_luis_result(self):
        result = luis_result("Envios", 0.66)
        result.intents = {"Otro": SimpleNamespace(score=0.99)}

        assert top_scoring_intent(result) == ("Envios", 0.66)

    def test_falls_back_to_best_intent_score(self):
        result = SimpleNamespace(
            intents={"Comprar": SimpleNamespace(score=0.3), "Precio": SimpleNamespace(score=0.7)},
            properties={},
        )

        assert top_scoring_intent(result) == ("Precio", 0.7)

    def test_no_intents_is_none(self):
        assert top_scoring_intent(SimpleNamespace(intents={}, properties={})) == (NONE_INTENT, 0.0)


class TestResolveAnswer:
    @pytest.mark.asyncio
    async def test_blank_qna_answer_falls_through_to_luis(self, qna_maker, recognizer):
        qna_maker.get_answers.return_value = [qna_answer("")]
        recognizer.recognize.return_value = luis_result("Precio", 0.5)

        reply = await resolve_answer(MagicMock(), qna_maker, recognizer)

        assert reply.kind is ReplyKind.INTENT_ANSWER
        assert (reply.intent, reply.score) == ("Precio", 0.5)

    @pytest.mark.asyncio
    async def test_qna_answer_kind(self, qna_maker, recognizer):
        qna_maker.get_answers.return_value = [qna_answer("Claro", 0.8)]

        reply = await resolve_answer(MagicMock(), qna_maker, recognizer)

        assert reply.kind is ReplyKind.QNA_ANSWER
        assert reply.text == "Claro"
        assert reply.score == 0.8

    @pytest.mark.asyncio
    async def test_luis_failure_is_unavailable(self, qna_maker):
        recognizer = MagicMock()
        recognizer.recognize = AsyncMock(side_effect=RuntimeError("luis caído"))

        reply = await resolve_answer(MagicMock(), qna_maker, recognizer)

        assert reply.kind is ReplyKind.UNAVAILABLE
        assert reply.text == presenters.SERVICE_UNAVAILABLE
