"""Rule-based interpretation of free-form nutrition questions.

The interpreter walks an ordered table of ``IntentRule`` entries. Each rule
has a cheap text predicate and a handler; the first rule whose predicate
matches and whose handler returns an ``Interpretation`` wins. A handler may
return ``None`` to pass the turn on when an entity it needs is missing.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from calorie_coach.domain.conversation import ConversationState, PendingSlot
from calorie_coach.domain.foods import FoodFilter, FoodRecord
from calorie_coach.domain.intents import (
    Clarification,
    FoodComparison,
    FoodList,
    IntentKind,
    Interpretation,
    Message,
    NoMatch,
    Payload,
)
from calorie_coach.domain.queries import ParsedQuery
from calorie_coach.domain.vocabulary import DEFAULT_MEAL_TIME, DEFAULT_TARGET_CALORIES
from calorie_coach.services.catalog import NutritionCatalog
from calorie_coach.services.extractors import (
    extract_any_number,
    extract_calorie_range,
    extract_food_info_target,
    has_calorie_phrase,
    parse_query,
)
from calorie_coach.services.recommendations import RecommendationService

_logger = logging.getLogger(__name__)

COMPARISON_LIMIT = 5
RANGE_LIMIT = 10
MACRO_LIMIT = 10
DIETARY_LIMIT = 10
SUGGESTION_LIMIT = 8
FOOD_INFO_LIMIT = 5
LIST_LIMIT = 15
SEARCH_LIMIT = 8

_COMPARISON_WORDS = re.compile(
    r"\b(?:compare|which|more|less|difference|between)\b", re.I
)
_NUTRIENT_WORDS = re.compile(r"calorie|protein|carb|\bfat", re.I)
_RANGE_WORDS = re.compile(
    r"\b(?:between|under|below|above|over|less than|more than|range)\b", re.I
)
_DIGIT = re.compile(r"\d")
_MACRO_WORDS = re.compile(
    r"\b(?:high|low|rich in|good source of|more|less|lean)\b", re.I
)
_DIET_WORDS = re.compile(r"vegetarian|\bveg|non.?veg|eggetarian|\beggs?\b|vegan", re.I)
_DIET_LISTING_WORDS = re.compile(r"option|food|meal|suggest|recommend", re.I)
_WHAT_CAN_I_EAT = re.compile(
    r"what can i eat|what should i eat|what to eat|\boptions\b|\bchoices\b", re.I
)
_SUGGEST_WORDS = re.compile(r"suggest|recommend|give me|find me", re.I)
_MEAL_OR_FOOD = re.compile(r"meal|food", re.I)
_LIST_WORDS = re.compile(r"\blist\b|\bshow\b|give me|tell me about|what are", re.I)
_GREETING_WORDS = r"(?:hi|hello|hey|thanks|thank you|help|what can you do)"
_GREETING = re.compile(rf"\b{_GREETING_WORDS}\b", re.I)
_GREETING_ONLY = re.compile(rf"^{_GREETING_WORDS}\W*$", re.I)
_CANCEL = re.compile(r"^\s*(?:cancel|stop|never\s*mind)\b", re.I)

CALORIE_PROMPT = (
    "What calorie range are you looking for? (e.g., 300-500 calories)"
)
CALORIE_RETRY_PROMPT = (
    "Please provide a calorie number. For example: '500 calories' or '500'"
)
CUISINE_PROMPT = (
    "What type of cuisine would you prefer? "
    "(e.g., North Indian, South Indian, Bengali, Gujarati)"
)
CUISINE_RETRY_PROMPT = (
    "I couldn't identify the cuisine. Please specify a cuisine type "
    "(e.g., North Indian, South Indian, Bengali, Gujarati)"
)
MORE_SPECIFIC_HINT = "Be more specific to narrow down results."

HELP_TEXT = (
    "Hi! I'm your nutrition coach. I can help you with:\n\n"
    "Food information:\n"
    '- "How many calories in roti?"\n'
    '- "Tell me about biryani"\n'
    '- "Which has more calories, roti or naan?"\n\n'
    "Meal recommendations:\n"
    '- "Suggest a meal for 500 calories"\n'
    '- "What should I eat for breakfast?"\n'
    '- "North Indian lunch for 400 calories"\n\n'
    "Smart queries:\n"
    '- "High protein foods"\n'
    '- "Foods between 200-300 calories"\n'
    '- "Vegetarian options under 250 calories"\n'
    '- "Low carb South Indian foods"'
)
FALLBACK_TEXT = (
    "I'm not sure I understood that. I can help you with:\n\n"
    '- Food info: "calories in roti", "tell me about biryani"\n'
    '- Comparisons: "which has more calories, roti or naan?"\n'
    '- Meal suggestions: "suggest a meal for 500 calories"\n'
    '- Smart filters: "high protein foods", "foods under 250 calories"\n'
    '- Dietary options: "vegetarian options", "non-veg foods under 300 calories"\n\n'
    'Try rephrasing your question or ask me "help" for more examples.'
)


@dataclass(frozen=True)
class Turn:
    """One user message with its extracted entities and incoming state."""

    text: str
    query: ParsedQuery
    state: ConversationState


Handler = Callable[[Turn], Interpretation | None]


@dataclass(frozen=True)
class IntentRule:
    """A predicate and handler pair evaluated in table order."""

    kind: IntentKind
    predicate: Callable[[Turn], bool]
    handler: Handler


@dataclass
class QueryInterpreter:
    """Resolve a message to an intent and produce its payload."""

    catalog: NutritionCatalog
    recommendations: RecommendationService
    default_meal_time: str = DEFAULT_MEAL_TIME
    default_calories: int = DEFAULT_TARGET_CALORIES
    debug: bool = False

    def __post_init__(self) -> None:
        self.rules: tuple[IntentRule, ...] = (
            IntentRule(
                IntentKind.PENDING_SLOT,
                lambda turn: not turn.state.is_idle,
                self._continue_pending,
            ),
            IntentRule(
                IntentKind.COMPARISON,
                lambda turn: bool(
                    _COMPARISON_WORDS.search(turn.text)
                    and _NUTRIENT_WORDS.search(turn.text)
                ),
                self._compare,
            ),
            IntentRule(
                IntentKind.CALORIE_RANGE,
                lambda turn: bool(
                    _RANGE_WORDS.search(turn.text) and _DIGIT.search(turn.text)
                ),
                self._calorie_range,
            ),
            IntentRule(
                IntentKind.MACRO_FOCUS,
                lambda turn: bool(_MACRO_WORDS.search(turn.text))
                and turn.query.macro_focus is not None,
                self._macro_focus,
            ),
            IntentRule(
                IntentKind.DIETARY_OPTIONS,
                lambda turn: bool(
                    _DIET_WORDS.search(turn.text)
                    and _DIET_LISTING_WORDS.search(turn.text)
                ),
                self._dietary_options,
            ),
            IntentRule(
                IntentKind.WHAT_CAN_I_EAT,
                lambda turn: bool(_WHAT_CAN_I_EAT.search(turn.text)),
                self._what_can_i_eat,
            ),
            IntentRule(
                IntentKind.MEAL_TIME,
                lambda turn: turn.query.meal_time is not None,
                self._meal_time,
            ),
            IntentRule(
                IntentKind.MEAL_SUGGESTION,
                lambda turn: bool(
                    _SUGGEST_WORDS.search(turn.text)
                    and _MEAL_OR_FOOD.search(turn.text)
                ),
                self._meal_suggestion,
            ),
            IntentRule(
                IntentKind.FOOD_INFO,
                lambda turn: not has_calorie_phrase(turn.text),
                self._food_info,
            ),
            IntentRule(
                IntentKind.CALORIE_TARGET,
                lambda turn: has_calorie_phrase(turn.text),
                self._calorie_target,
            ),
            IntentRule(
                IntentKind.CATALOG_LIST,
                lambda turn: bool(_LIST_WORDS.search(turn.text)),
                self._catalog_list,
            ),
            IntentRule(
                IntentKind.FOOD_SEARCH,
                lambda turn: turn.query.food_name is not None,
                self._food_search,
            ),
            IntentRule(
                IntentKind.GREETING,
                lambda turn: bool(_GREETING.search(turn.text)),
                lambda turn: self._reply(IntentKind.GREETING, Message(HELP_TEXT)),
            ),
            IntentRule(
                IntentKind.UNKNOWN,
                lambda turn: True,
                lambda turn: self._reply(IntentKind.UNKNOWN, Message(FALLBACK_TEXT)),
            ),
        )

    def interpret(self, state: ConversationState, text: str) -> Interpretation:
        """Interpret one message given the session's current state."""
        turn = Turn(text=text.strip(), query=parse_query(text), state=state)
        for rule in self.rules:
            if not rule.predicate(turn):
                continue
            result = rule.handler(turn)
            if result is not None:
                if self.debug:
                    _logger.info(
                        "Interpreted %r as %s (state=%s)",
                        text,
                        result.kind,
                        result.state.slot,
                    )
                return result
        return self._reply(IntentKind.UNKNOWN, Message(FALLBACK_TEXT))

    # Pending slot

    def _continue_pending(self, turn: Turn) -> Interpretation:
        kind = IntentKind.PENDING_SLOT
        if _CANCEL.search(turn.text):
            return self._reply(kind, Message("Okay, let's start over."))
        if turn.state.slot is PendingSlot.AWAITING_CALORIES:
            calories = turn.query.calories or extract_any_number(turn.text)
            if calories is None:
                return Interpretation(
                    kind,
                    Clarification(CALORIE_RETRY_PROMPT, PendingSlot.AWAITING_CALORIES),
                    turn.state,
                )
            meal_time = turn.state.meal_time or turn.query.meal_time
            return self._recommend_or_ask_cuisine(kind, turn, calories, meal_time)

        cuisine = turn.query.cuisine
        if cuisine is None:
            return Interpretation(
                kind,
                Clarification(CUISINE_RETRY_PROMPT, PendingSlot.AWAITING_CUISINE),
                turn.state,
            )
        calories = turn.query.calories or turn.state.calories or self.default_calories
        meal_time = turn.state.meal_time or turn.query.meal_time
        return self._recommend(kind, turn, calories, cuisine, meal_time)

    # Catalog questions

    def _compare(self, turn: Turn) -> Interpretation | None:
        foods = self.catalog.find_many(turn.text)
        if len(foods) < 2:
            return None
        focus = turn.query.macro_focus
        nutrient = focus.macro if focus is not None else "calories"
        return self._reply(
            IntentKind.COMPARISON,
            FoodComparison(nutrient=nutrient, foods=tuple(foods[:COMPARISON_LIMIT])),
        )

    def _calorie_range(self, turn: Turn) -> Interpretation | None:
        calorie_range = extract_calorie_range(turn.text)
        if calorie_range is None:
            return None
        foods = self.catalog.filter(
            FoodFilter(
                cuisine=turn.query.cuisine,
                dietary_type=turn.query.dietary_type,
                min_calories=calorie_range.min_calories,
                max_calories=calorie_range.max_calories,
            )
        )
        bounds = f"{calorie_range.min_calories}-{calorie_range.max_calories}"
        if not foods:
            return self._reply(
                IntentKind.CALORIE_RANGE,
                NoMatch(
                    f"I couldn't find any foods between {bounds} calories. "
                    "Try a different range!"
                ),
            )
        foods.sort(key=lambda food: food.calories)
        title = f"Foods between {bounds} calories"
        if turn.query.cuisine:
            title += f" ({turn.query.cuisine})"
        return self._reply(
            IntentKind.CALORIE_RANGE, _capped(title, foods, RANGE_LIMIT)
        )

    def _macro_focus(self, turn: Turn) -> Interpretation | None:
        focus = turn.query.macro_focus
        if focus is None:
            return None
        cuisine = turn.query.cuisine
        foods = self.catalog.top_by_macro(
            focus.macro, descending=focus.high, limit=MACRO_LIMIT, cuisine=cuisine
        )
        label = "High" if focus.high else "Low"
        title = f"Top {len(foods)} {label} {focus.macro.capitalize()} Foods"
        if cuisine is not None:
            if not foods:
                return self._reply(
                    IntentKind.MACRO_FOCUS,
                    NoMatch(f"I don't have any {cuisine} foods to rank yet."),
                )
            title = f"{title} ({cuisine})"
        return self._reply(
            IntentKind.MACRO_FOCUS,
            FoodList(title=title, foods=tuple(foods), total=len(foods)),
        )

    def _dietary_options(self, turn: Turn) -> Interpretation:
        query = turn.query
        foods = self.catalog.filter(
            FoodFilter(
                cuisine=query.cuisine,
                dietary_type=query.dietary_type,
                max_calories=query.calories,
            )
        )
        label = " ".join(
            part
            for part in (
                (query.dietary_type or "").capitalize(),
                query.cuisine or "",
                "Food Options",
            )
            if part
        )
        if query.calories:
            label += f" (under {query.calories} cal)"
        if not foods:
            return self._reply(
                IntentKind.DIETARY_OPTIONS,
                NoMatch(
                    f"I couldn't find any {label.lower()}. Try different criteria!"
                ),
            )
        foods.sort(key=lambda food: food.calories)
        return self._reply(
            IntentKind.DIETARY_OPTIONS, _capped(label, foods, DIETARY_LIMIT)
        )

    def _food_info(self, turn: Turn) -> Interpretation | None:
        target = extract_food_info_target(turn.text)
        if target is None:
            return None
        foods = self.catalog.search_with_fallback(target)
        if not foods:
            return self._reply(
                IntentKind.FOOD_INFO,
                NoMatch(
                    f'I couldn\'t find "{target}" in my database. Please try a '
                    "different food name or check the spelling."
                ),
            )
        title = f'I found {len(foods)} foods matching "{target}"'
        return self._reply(IntentKind.FOOD_INFO, _capped(title, foods, FOOD_INFO_LIMIT))

    def _catalog_list(self, turn: Turn) -> Interpretation | None:
        query = turn.query
        if not (query.cuisine or query.meal_time or query.dietary_type):
            return None
        foods = self.catalog.filter(
            FoodFilter(
                cuisine=query.cuisine,
                meal_time=query.meal_time,
                dietary_type=query.dietary_type,
            )
        )
        if not foods:
            return None
        return self._reply(
            IntentKind.CATALOG_LIST, _capped("Food Options", foods, LIST_LIMIT)
        )

    def _food_search(self, turn: Turn) -> Interpretation | None:
        needle = turn.query.food_name
        if needle is None or len(needle) < 3:
            return None
        if _GREETING_ONLY.match(turn.text):
            return None
        foods = self.catalog.search_with_fallback(needle)
        if not foods:
            return None
        title = f'I found {len(foods)} foods matching "{needle}"'
        return self._reply(IntentKind.FOOD_SEARCH, _capped(title, foods, SEARCH_LIMIT))

    # Recommendation intents

    def _what_can_i_eat(self, turn: Turn) -> Interpretation:
        kind = IntentKind.WHAT_CAN_I_EAT
        query = turn.query
        if query.calories is None:
            return self._ask_calories(kind, query.meal_time)
        if query.meal_time is not None:
            return self._recommend_or_ask_cuisine(
                kind, turn, query.calories, query.meal_time
            )
        foods = self.catalog.suggest_near(
            query.calories, cuisine=query.cuisine, limit=SUGGESTION_LIMIT
        )
        where = f" for {query.cuisine}" if query.cuisine else ""
        if not foods:
            return self._reply(
                kind,
                NoMatch(
                    f"I couldn't find foods around {query.calories} calories"
                    f"{where}. Try a different calorie range!"
                ),
            )
        title = f"Food Suggestions (~{query.calories} calories"
        title += f", {query.cuisine})" if query.cuisine else ")"
        return self._reply(
            kind, FoodList(title=title, foods=tuple(foods), total=len(foods))
        )

    def _meal_time(self, turn: Turn) -> Interpretation:
        kind = IntentKind.MEAL_TIME
        meal_time = turn.query.meal_time
        if turn.query.calories is None:
            return self._ask_calories(
                kind,
                meal_time,
                prompt=f"Great! I can suggest a {meal_time} for you. {CALORIE_PROMPT}",
            )
        return self._recommend_or_ask_cuisine(
            kind, turn, turn.query.calories, meal_time
        )

    def _meal_suggestion(self, turn: Turn) -> Interpretation:
        kind = IntentKind.MEAL_SUGGESTION
        if turn.query.calories is None:
            return self._ask_calories(
                kind,
                turn.query.meal_time,
                prompt=f"I'd be happy to suggest a meal! {CALORIE_PROMPT}",
            )
        return self._recommend_or_ask_cuisine(
            kind, turn, turn.query.calories, turn.query.meal_time
        )

    def _calorie_target(self, turn: Turn) -> Interpretation | None:
        calories = turn.query.calories
        if calories is None:
            return None
        return self._recommend_or_ask_cuisine(
            IntentKind.CALORIE_TARGET, turn, calories, turn.query.meal_time
        )

    def _recommend_or_ask_cuisine(
        self, kind: IntentKind, turn: Turn, calories: int, meal_time: str | None
    ) -> Interpretation:
        cuisine = turn.query.cuisine
        if cuisine is None:
            prompt = f"I can suggest meals for {calories} calories. {CUISINE_PROMPT}"
            return Interpretation(
                kind,
                Clarification(prompt, PendingSlot.AWAITING_CUISINE),
                ConversationState.awaiting_cuisine(
                    calories=calories, meal_time=meal_time
                ),
            )
        return self._recommend(kind, turn, calories, cuisine, meal_time)

    def _recommend(
        self,
        kind: IntentKind,
        turn: Turn,
        calories: int,
        cuisine: str,
        meal_time: str | None,
    ) -> Interpretation:
        meal_time = meal_time or self.default_meal_time
        recommendation = self.recommendations.recommend(
            calories, cuisine, meal_time, turn.query.dietary_type or "both"
        )
        if recommendation is None:
            return self._reply(
                kind,
                NoMatch(
                    f"I don't have {cuisine} {meal_time} combinations in my "
                    "database. Try asking for a different cuisine or meal type."
                ),
            )
        return self._reply(kind, recommendation)

    def _ask_calories(
        self, kind: IntentKind, meal_time: str | None, prompt: str | None = None
    ) -> Interpretation:
        return Interpretation(
            kind,
            Clarification(
                prompt or f"I'd be happy to suggest foods! {CALORIE_PROMPT}",
                PendingSlot.AWAITING_CALORIES,
            ),
            ConversationState.awaiting_calories(meal_time=meal_time),
        )

    @staticmethod
    def _reply(kind: IntentKind, payload: Payload) -> Interpretation:
        return Interpretation(kind, payload, ConversationState.idle())


def _capped(title: str, foods: list[FoodRecord], limit: int) -> FoodList:
    hint = MORE_SPECIFIC_HINT if len(foods) > limit else None
    return FoodList(
        title=title, foods=tuple(foods[:limit]), total=len(foods), hint=hint
    )
