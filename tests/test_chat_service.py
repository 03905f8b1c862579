"""Tests for the chat assistant: prompting, fallbacks and history."""

from datetime import datetime, timedelta
from types import SimpleNamespace

import openai
import pytest

from conftest import add_questionnaire
from database import models
from services.chat_service import (
    EMPTY_COMPLETION_TEXT,
    FALLBACK_RULES,
    ChatService,
    fallback_response,
)


class FakeCompletions:
    def __init__(self, content="Eat more vegetables.", error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self, **kwargs):
        self.completions = FakeCompletions(**kwargs)
        self.chat = SimpleNamespace(completions=self.completions)


def rule_reply(name, language="english"):
    return next(r for r in FALLBACK_RULES if r.name == name).replies[language]


def test_fallback_rules_are_checked_in_order():
    assert fallback_response("How many calories in a banana?", "english") == rule_reply("calories")
    assert fallback_response("Can you recommend a dinner?", "english") == rule_reply("recommendation")
    # first matching rule wins
    assert fallback_response("Recommend something low in calories", "english") == rule_reply("calories")
    assert fallback_response("hello", "english") == rule_reply("default")


def test_fallback_is_localized():
    assert fallback_response("מה לאכול היום?", "hebrew") == rule_reply("recommendation", "hebrew")
    assert fallback_response("hello", "he") == rule_reply("default", "hebrew")


def test_without_provider_uses_fallback_and_persists(db, user, chat_service):
    reply, message_id = chat_service.process_message(db, user.id, "How many calories in rice?")

    assert reply == rule_reply("calories")
    stored = db.get(models.ChatMessage, message_id)
    assert stored.user_message == "How many calories in rice?"
    assert stored.ai_response == reply
    assert stored.language == "english"


def test_provider_reply_is_returned_and_stored(db, user):
    client = FakeOpenAI(content="Try lentils for protein.")
    service = ChatService(client=client, model="test-model", history_window=10)

    reply, message_id = service.process_message(db, user.id, "Protein ideas?")

    assert reply == "Try lentils for protein."
    assert db.get(models.ChatMessage, message_id).ai_response == reply
    call = client.completions.calls[0]
    assert call["model"] == "test-model"
    assert call["max_tokens"] == 1000
    assert call["messages"][0]["role"] == "system"
    assert call["messages"][-1] == {"role": "user", "content": "Protein ideas?"}


def test_provider_error_falls_back(db, user):
    service = ChatService(client=FakeOpenAI(error=openai.OpenAIError("boom")), history_window=10)

    reply, message_id = service.process_message(db, user.id, "hi there")

    assert reply == rule_reply("default")
    assert db.get(models.ChatMessage, message_id) is not None


def test_empty_completion_returns_apology(db, user):
    service = ChatService(client=FakeOpenAI(content=""), history_window=10)
    reply, _ = service.process_message(db, user.id, "hi", language="hebrew")
    assert reply == EMPTY_COMPLETION_TEXT["hebrew"]


def test_prompt_includes_history_and_context(db, user):
    add_questionnaire(db, user, dietary_style="vegetarian", allergies=["peanuts"])
    db.add(models.ConsumedMeal(user_id=user.id, name="Toast", calories=300, protein_g=10, carbs_g=40, fats_g=8))
    db.add(models.ConsumedMeal(user_id=user.id, name="Old", calories=900,
                               created_at=datetime.utcnow() - timedelta(days=2)))
    db.commit()
    client = FakeOpenAI()
    service = ChatService(client=client, history_window=2)

    for text in ("first", "second", "third"):
        service.process_message(db, user.id, text)

    messages = client.completions.calls[-1]["messages"]
    system = messages[0]["content"]
    assert "2000" in system
    assert "Consumed today: 300" in system
    assert "vegetarian" in system and "peanuts" in system
    # two previous exchanges, oldest first, then the new message
    assert [m["content"] for m in messages[1:] if m["role"] == "user"] == ["first", "second", "third"]


def test_user_context_sums_only_today(db, user):
    db.add(models.ConsumedMeal(user_id=user.id, name="Lunch", calories=500, protein_g=30, carbs_g=50, fats_g=15))
    db.add(models.ConsumedMeal(user_id=user.id, name="Yesterday", calories=800,
                               created_at=datetime.utcnow() - timedelta(days=1)))
    db.commit()
    context = ChatService(client=None, use_default_client=False).user_context(db, user.id)
    assert context["today_intake"]["calories"] == 500
    assert context["daily_goals"] is None
    assert context["allergies"] == []


def test_history_is_oldest_first_and_limited(db, user, other_user, chat_service):
    base = datetime(2026, 1, 1, 12, 0, 0)
    for i in range(5):
        db.add(models.ChatMessage(user_id=user.id, user_message=f"q{i}", ai_response=f"a{i}",
                                  language="english", created_at=base + timedelta(minutes=i)))
    db.add(models.ChatMessage(user_id=other_user.id, user_message="other", ai_response="x", language="english"))
    db.commit()

    assert [m.user_message for m in chat_service.history(db, user.id, limit=3)] == ["q2", "q3", "q4"]
    assert [m.user_message for m in chat_service.history(db, user.id)] == ["q0", "q1", "q2", "q3", "q4"]


def test_history_orders_by_timestamp_not_insertion(db, user, chat_service):
    base = datetime(2026, 1, 1, 12, 0, 0)
    for minute in (3, 1, 2, 0):
        db.add(models.ChatMessage(user_id=user.id, user_message=f"q{minute}", ai_response=f"a{minute}",
                                  language="english", created_at=base + timedelta(minutes=minute)))
    db.commit()

    assert [m.user_message for m in chat_service.history(db, user.id)] == ["q0", "q1", "q2", "q3"]
    assert [m.user_message for m in chat_service.history(db, user.id, limit=2)] == ["q2", "q3"]


def test_clear_history_only_removes_callers_messages(db, user, other_user, chat_service):
    chat_service.process_message(db, user.id, "one")
    chat_service.process_message(db, user.id, "two")
    chat_service.process_message(db, other_user.id, "mine")

    assert chat_service.clear_history(db, user.id) == 2
    assert chat_service.history(db, user.id) == []
    assert len(chat_service.history(db, other_user.id)) == 1


@pytest.mark.parametrize("language,expected", [("HE", "hebrew"), ("hebrew", "hebrew"), ("fr", "english")])
def test_language_is_normalized_on_store(db, user, chat_service, language, expected):
    _, message_id = chat_service.process_message(db, user.id, "hello", language=language)
    assert db.get(models.ChatMessage, message_id).language == expected
