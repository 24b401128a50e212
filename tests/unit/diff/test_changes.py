from revision_kit.diff.changes import (
    ChangeCounts,
    build_change_markers,
    calculate_change_counts,
    is_likely_edit,
)

SURVEY_120 = "the survey sample included 120 graduate students"
SURVEY_140 = "the survey sample included 140 graduate students"


class TestCalculateChangeCounts:
    def test_first_version_estimates_from_size(self) -> None:
        assert calculate_change_counts(None, "x" * 1600) == ChangeCounts(
            additions=10, deletions=0, major_edits=2
        )

    def test_first_version_minimums(self) -> None:
        assert calculate_change_counts("", "tiny") == ChangeCounts(
            additions=1, deletions=0, major_edits=1
        )

    def test_counts_from_line_diff(self) -> None:
        previous = "Intro\nOld A\nOld B\nOld C\nEnd"
        current = "Intro\nNew A\nNew B\nEnd\nAppendix"

        counts = calculate_change_counts(previous, current)

        assert counts.additions == 3
        assert counts.deletions == 3
        assert counts.major_edits == 1

    def test_unchanged_text(self) -> None:
        counts = calculate_change_counts("same\ntext", "same\ntext")

        assert counts == ChangeCounts(0, 0, 0)


class TestIsLikelyEdit:
    def test_reworded_sentence(self) -> None:
        assert is_likely_edit(
            "the survey sample included 120 graduate students",
            "the survey sample included 140 graduate students",
        )

    def test_short_lines_never_edits(self) -> None:
        assert not is_likely_edit("short line", "short lines")

    def test_identical_lines(self) -> None:
        line = "the survey sample included 120 graduate students"
        assert not is_likely_edit(line, line)


class TestBuildChangeMarkers:
    def test_additions_removals_and_edits(self) -> None:
        previous = "Intro\n" + SURVEY_120 + "\nOld section"
        current = "Intro\n" + SURVEY_140 + "\nNew section"

        markers = build_change_markers(previous, current)

        assert [m.type for m in markers] == [
            "addition",
            "addition",
            "removal",
            "removal",
            "edit",
        ]
        assert markers[0].id == "change-add-1"
        assert markers[-1].label == "Edit 1"

    def test_limits_and_preview_length(self) -> None:
        current = "\n".join(f"{n} " + "z" * 300 for n in range(20))

        markers = build_change_markers("", current)

        assert len(markers) == 6
        assert all(len(m.preview) == 220 for m in markers)

    def test_binary_notice(self) -> None:
        binary = "%PDF-1.7\n" + "\x00\x01\x02\x03" * 40 + " endobj"

        markers = build_change_markers(binary, "text")

        assert len(markers) == 1
        assert markers[0].label == "Diff Notice"
