"""Nutrition chat assistant.

Builds a prompt from the user's goals, today's intake and recent
exchanges, asks the hosted chat model, and stores every exchange. When no
model is configured or the call fails, the reply comes from
`FALLBACK_RULES`: an ordered table of keyword rules checked first to last,
ending with a catch-all.
"""

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Callable, Dict, List, Optional, Tuple

import openai
from sqlalchemy.orm import Session

from core.config import get_settings
from core.logger import get_logger
from core.repository import save
from database import models
from schemas.menu_schema import load_json_list
from services.llm_client import get_openai_client

logger = get_logger("services.chat_service")

HEBREW = "hebrew"
EMPTY_COMPLETION_TEXT = {
    HEBREW: "מצטער, לא הצלחתי לעבד את השאלה שלך.",
    "english": "Sorry, I couldn't process your question.",
}


def normalize_language(language: Optional[str]) -> str:
    return HEBREW if (language or "").strip().lower() in ("hebrew", "he", "he-il") else "english"


def _mentions(*keywords: str) -> Callable[[str], bool]:
    lowered = [k.lower() for k in keywords]
    return lambda message: any(k in message for k in lowered)


@dataclass(frozen=True)
class FallbackRule:
    """A keyword predicate and the localized reply it selects."""

    name: str
    matches: Callable[[str], bool]
    replies: Dict[str, str]


FALLBACK_RULES: Tuple[FallbackRule, ...] = (
    FallbackRule(
        "calories",
        _mentions("calories", "calorie", "kcal", "קלוריות", "כמה"),
        {
            "english": "To give you accurate calorie information, I need more details about the food or "
                       "quantity. You can photograph the product or enter additional details.",
            HEBREW: "כדי לתת לך מידע מדויק על קלוריות, אני צריך פרטים נוספים על המזון או הכמות. "
                    "אתה יכול לצלם את המוצר או להכניס פרטים נוספים.",
        },
    ),
    FallbackRule(
        "recommendation",
        _mentions("recommend", "what to eat", "what should i eat", "המלצה", "מה לאכול"),
        {
            "english": "I'd be happy to recommend meals for you! Based on the information I have, I suggest "
                       "focusing on meals with quality protein, fresh vegetables, and complex carbohydrates. "
                       "You can tell me about your goals or dietary restrictions and I'll give more specific "
                       "recommendations.",
            HEBREW: "אני אשמח להמליץ לך על ארוחות! בהתבסס על המידע שיש לי, אני מציע להתמקד בארוחות עם חלבון "
                    "איכותי, ירקות טריים ופחמימות מורכבות. אתה יכול לספר לי על המטרות שלך או הגבלות תזונתיות "
                    "ואתן המלצות ספציפיות יותר.",
        },
    ),
    FallbackRule(
        "default",
        lambda message: True,
        {
            "english": "I'm here to help with nutrition questions! You can ask me about nutritional values, "
                       "meal recommendations, or any other nutrition-related questions. Important to remember "
                       "this is general advice and not a substitute for licensed medical consultation.",
            HEBREW: "אני כאן לעזור לך עם שאלות תזונה! אתה יכול לשאול אותי על ערכים תזונתיים, המלצות לארוחות, "
                    "או כל שאלה אחרת הקשורה לתזונה. חשוב לזכור שזה ייעוץ כללי ולא תחליף לייעוץ רפואי מוסמך.",
        },
    ),
)


def fallback_response(message: str, language: str, rules: Tuple[FallbackRule, ...] = FALLBACK_RULES) -> str:
    """Return the reply of the first rule whose predicate matches."""
    lowered = message.lower()
    lang = normalize_language(language)
    for rule in rules:
        if rule.matches(lowered):
            return rule.replies[lang]
    return rules[-1].replies[lang]


SYSTEM_PROMPT = {
    "english": (
        "You are an expert AI nutrition consultant helping users with nutrition questions.\n\n"
        "Important limitations:\n"
        "- You do not provide licensed medical advice\n"
        "- For serious health issues - refer to a doctor\n"
        "- Always emphasize this is general advice and not a substitute for professional consultation\n\n"
        "User information:\n{context}\n\n"
        "Response instructions:\n"
        "- Give practical and actionable answers\n"
        "- Use user information to provide personalized recommendations\n"
        "- For food questions: provide calories, protein, carbs, fat, and vitamins\n"
        "- For meal recommendations: consider goals, restrictions and what's left to consume today\n"
        "- Always maintain a friendly and professional tone"
    ),
    HEBREW: (
        "אתה יועץ תזונה AI מומחה שעוזר למשתמשים עם שאלות תזונה.\n\n"
        "הגבלות חשובות:\n"
        "- אתה לא נותן ייעוץ רפואי מוסמך\n"
        "- במקרי בעיות בריאותיות חמורות - הפנה לרופא\n"
        "- תמיד הדגש שזה ייעוץ כללי ולא תחליף לייעוץ מקצועי\n\n"
        "מידע על המשתמש:\n{context}\n\n"
        "הוראות תגובה:\n"
        "- תן תשובות מעשיות ופרקטיות\n"
        "- השתמש במידע על המשתמש למתן המלצות מותאמות\n"
        "- עבור שאלות על מזון: תן מידע על קלוריות, חלבון, פחמימות, שומן, ויתמינים\n"
        "- עבור המלצות ארוחות: קח בחשבון יעדים, הגבלות ומה שנותר לצריכה היום\n"
        "- תמיד שמור על טון ידידותי ומקצועי"
    ),
}


class ChatService:
    """Chat assistant with persisted history."""

    def __init__(self, client=None, model: Optional[str] = None, history_window: Optional[int] = None,
                 use_default_client: bool = True):
        settings = get_settings()
        self._client = client
        self._use_default_client = use_default_client and client is None
        self.model = model or settings.openai_chat_model
        self.history_window = settings.chat_history_window if history_window is None else history_window

    @property
    def client(self):
        if self._client is None and self._use_default_client:
            return get_openai_client()
        return self._client

    def user_context(self, db: Session, user_id: int, now: Optional[datetime] = None) -> Dict:
        """Snapshot of daily goals, today's consumed totals and restrictions."""
        now = now or datetime.utcnow()
        start = datetime.combine(now.date(), time.min)
        end = start + timedelta(days=1)

        plan = db.query(models.NutritionPlan).filter(models.NutritionPlan.user_id == user_id).first()
        eaten = (
            db.query(models.ConsumedMeal)
            .filter(
                models.ConsumedMeal.user_id == user_id,
                models.ConsumedMeal.created_at >= start,
                models.ConsumedMeal.created_at < end,
            )
            .all()
        )
        questionnaire = (
            db.query(models.UserQuestionnaire).filter(models.UserQuestionnaire.user_id == user_id).first()
        )
        return {
            "daily_goals": {
                "calories": plan.goal_calories,
                "protein": plan.goal_protein_g,
                "carbs": plan.goal_carbs_g,
                "fat": plan.goal_fats_g,
            } if plan else None,
            "today_intake": {
                "calories": round(sum(m.calories or 0 for m in eaten), 1),
                "protein": round(sum(m.protein_g or 0 for m in eaten), 1),
                "carbs": round(sum(m.carbs_g or 0 for m in eaten), 1),
                "fat": round(sum(m.fats_g or 0 for m in eaten), 1),
            },
            "restrictions": [questionnaire.dietary_style] if questionnaire and questionnaire.dietary_style else [],
            "allergies": load_json_list(questionnaire.allergies) if questionnaire else [],
        }

    @staticmethod
    def system_prompt(language: str, context: Dict) -> str:
        goals = context.get("daily_goals") or {}
        intake = context.get("today_intake") or {}
        lines = "\n".join([
            f"Daily goals: {goals.get('calories', 'n/a')} kcal, {goals.get('protein', 'n/a')}g protein, "
            f"{goals.get('carbs', 'n/a')}g carbs, {goals.get('fat', 'n/a')}g fat",
            f"Consumed today: {intake.get('calories', 0)} kcal, {intake.get('protein', 0)}g protein, "
            f"{intake.get('carbs', 0)}g carbs, {intake.get('fat', 0)}g fat",
            f"Dietary restrictions: {', '.join(context.get('restrictions') or []) or 'none'}",
            f"Allergies: {', '.join(context.get('allergies') or []) or 'none'}",
        ])
        return SYSTEM_PROMPT[normalize_language(language)].format(context=lines)

    @staticmethod
    def conversation(history: List[models.ChatMessage], message: str) -> List[Dict[str, str]]:
        turns = []
        for exchange in history:
            turns.append({"role": "user", "content": exchange.user_message})
            turns.append({"role": "assistant", "content": exchange.ai_response})
        turns.append({"role": "user", "content": message})
        return turns

    def _complete(self, messages: List[Dict[str, str]], language: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=1000,
            temperature=0.7,
        )
        content = response.choices[0].message.content if response.choices else None
        return content or EMPTY_COMPLETION_TEXT[normalize_language(language)]

    def process_message(self, db: Session, user_id: int, message: str, language: str = "english") -> Tuple[str, int]:
        """Answer a message and persist the exchange.

        Returns:
            (response text, stored message id). Provider problems never
            fail the request; the fallback table answers instead.
        """
        language = normalize_language(language)
        client = self.client
        if client is None:
            logger.info("No chat provider configured, using fallback response")
            reply = fallback_response(message, language)
        else:
            history = self.history(db, user_id, self.history_window)
            messages = [{"role": "system", "content": self.system_prompt(language, self.user_context(db, user_id))}]
            messages.extend(self.conversation(history, message))
            try:
                reply = self._complete(messages, language)
            except openai.OpenAIError as exc:
                logger.warning("Chat provider failed, using fallback response: %s", exc)
                reply = fallback_response(message, language)

        row = save(db, models.ChatMessage(
            user_id=user_id, user_message=message, ai_response=reply, language=language
        ))
        logger.info("Chat exchange %s stored for user %s", row.message_id, user_id)
        return reply, row.message_id

    def history(self, db: Session, user_id: int, limit: int = 50) -> List[models.ChatMessage]:
        """Most recent `limit` exchanges, returned oldest first."""
        if limit <= 0:
            return []
        rows = (
            db.query(models.ChatMessage)
            .filter(models.ChatMessage.user_id == user_id)
            .order_by(models.ChatMessage.created_at.desc(), models.ChatMessage.message_id.desc())
            .limit(limit)
            .all()
        )
        rows.reverse()
        return rows

    def clear_history(self, db: Session, user_id: int) -> int:
        deleted = db.query(models.ChatMessage).filter(models.ChatMessage.user_id == user_id).delete()
        db.commit()
        logger.info("Cleared %s chat exchanges for user %s", deleted, user_id)
        return deleted


chat_service = ChatService()
