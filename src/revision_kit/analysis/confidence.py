from revision_kit._rounding import clamp, round_half_up

from .models import ConfidenceAnalysis, Sentiment

HEDGING_TERMS = (
    "i think",
    "i believe",
    "maybe",
    "perhaps",
    "possibly",
    "probably",
    "i'm not sure",
    "i am not sure",
    "i guess",
    "kind of",
    "sort of",
    "not certain",
    "might be",
    "could be",
    "i suppose",
    "roughly",
    "approximately",
    "i'm not confident",
    "unsure",
)

CERTAINTY_TERMS = (
    "clearly",
    "definitely",
    "certainly",
    "absolutely",
    "without doubt",
    "evidently",
    "undoubtedly",
    "demonstrably",
    "specifically",
    "precisely",
)

SHORT_ANSWER_WORDS = 15
VERY_BRIEF_WORDS = 5

POSITIVE_THRESHOLD = 65
NEUTRAL_THRESHOLD = 40


def _certainty_count(lower: str) -> int:
    return sum(1 for term in CERTAINTY_TERMS if term in lower)


def detect_hesitation_signals(text: str) -> list[str]:
    lower = text.lower()
    signals = [term for term in HEDGING_TERMS if term in lower]

    word_count = len(lower.split())
    if word_count < SHORT_ANSWER_WORDS:
        signals.append("short_answer")
    if word_count < VERY_BRIEF_WORDS:
        signals.append("very_brief")
    return signals


def sentiment_for(confidence: int) -> Sentiment:
    if confidence >= POSITIVE_THRESHOLD:
        return "positive"
    if confidence >= NEUTRAL_THRESHOLD:
        return "neutral"
    return "negative"


def analyze_confidence(answer_text: str) -> ConfidenceAnalysis:
    """Heuristic confidence from answer length, certainty and hedging terms."""
    lower = answer_text.lower()
    signals = detect_hesitation_signals(answer_text)

    base = min(65, 30 + 1.2 * len(lower.split()))
    certainty_boost = min(20, 7 * _certainty_count(lower))
    hesitation_penalty = min(35, 10 * len(signals))

    raw = base + certainty_boost - hesitation_penalty
    confidence = round_half_up(clamp(raw, 0, 100))
    return ConfidenceAnalysis(
        sentiment=sentiment_for(confidence),
        confidence=confidence,
        hesitation_signals=signals,
    )


def blend_confidence(provider_confidence: int, text: str, signals: list[str]) -> int:
    """Adjust an external sentiment-derived confidence with the text signals."""
    lower = text.lower()
    length_bonus = min(15, round_half_up(len(lower.split()) / 8))
    certainty_boost = min(10, 5 * _certainty_count(lower))
    hesitation_penalty = min(30, 8 * len(signals))
    blended = provider_confidence + length_bonus + certainty_boost - hesitation_penalty
    return round_half_up(clamp(blended, 0, 100))
