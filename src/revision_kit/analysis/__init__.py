from .confidence import (
    CERTAINTY_TERMS,
    HEDGING_TERMS,
    analyze_confidence,
    blend_confidence,
    detect_hesitation_signals,
)
from .heuristics import (
    CORE_SECTIONS,
    abstract_alignment,
    analyze_heuristically,
    structural_readiness,
)
from .models import (
    ConfidenceAnalysis,
    GeneratedAnalysis,
    HeuristicAnalysis,
    SentimentScore,
    ThesisAnalysis,
)
from .sentiment import AzureLanguageSentimentClient, assess_confidence
from .thesis import ThesisAnalysisPayload, analyze_thesis

__all__ = [
    "ThesisAnalysis",
    "HeuristicAnalysis",
    "GeneratedAnalysis",
    "ConfidenceAnalysis",
    "SentimentScore",
    "CORE_SECTIONS",
    "analyze_heuristically",
    "abstract_alignment",
    "structural_readiness",
    "HEDGING_TERMS",
    "CERTAINTY_TERMS",
    "analyze_confidence",
    "detect_hesitation_signals",
    "blend_confidence",
    "AzureLanguageSentimentClient",
    "assess_confidence",
    "ThesisAnalysisPayload",
    "analyze_thesis",
]
