from unittest.mock import MagicMock

from revision_kit.diff.normalize import PARSER_UNAVAILABLE_MARKER
from revision_kit.diff.pull_request import (
    BINARY_DETECTED_MESSAGE,
    NO_CONTENT_MESSAGE,
    PARSER_MISSING_MESSAGE,
    DiffCapability,
    build_pull_request_diff,
)

BINARY = "%PDF-1.7\n" + "\x00\x01\x02\x03" * 40 + " endobj"


class TestBuildPullRequestDiff:
    def test_ready_diff(self) -> None:
        result = build_pull_request_diff("Intro\nOld method", "Intro\nNew method")

        assert result.capability == DiffCapability.READY
        assert result.is_ready
        assert result.message is None
        assert (result.stats.additions, result.stats.removals) == (1, 1)

    def test_parser_missing_flag(self) -> None:
        result = build_pull_request_diff("a", "b", parser_available=False)

        assert result.capability == DiffCapability.PARSER_MISSING
        assert result.message == PARSER_MISSING_MESSAGE
        assert len(result.rows) == 1
        assert result.rows[0].type == "context"
        assert result.stats.unchanged == 1

    def test_parser_marker_in_text(self) -> None:
        result = build_pull_request_diff(f"[{PARSER_UNAVAILABLE_MARKER}]", "text")

        assert result.capability == DiffCapability.PARSER_MISSING

    def test_parser_check_precedes_binary_check(self) -> None:
        result = build_pull_request_diff(BINARY, "text", parser_available=False)

        assert result.capability == DiffCapability.PARSER_MISSING

    def test_binary_detected(self) -> None:
        metrics_hook = MagicMock()

        result = build_pull_request_diff("Intro", BINARY, metrics_hook=metrics_hook)

        assert result.capability == DiffCapability.BINARY_DETECTED
        assert result.message == BINARY_DETECTED_MESSAGE
        assert not result.is_ready
        metrics_hook.increment.assert_called_once_with(
            "diff_degraded_total", labels={"capability": "binary_detected"}
        )

    def test_no_content(self) -> None:
        result = build_pull_request_diff("  ", "\n\n")

        assert result.capability == DiffCapability.NO_CONTENT
        assert result.message == NO_CONTENT_MESSAGE
        assert result.rows == []

    def test_truncation_reported(self) -> None:
        long_text = "\n".join(f"line {n}" for n in range(20))

        result = build_pull_request_diff(long_text, long_text, max_lines=5)

        assert result.stats.truncated is True
        assert result.stats.unchanged == 5
