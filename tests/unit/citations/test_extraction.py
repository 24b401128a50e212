from revision_kit.citations.extraction import extract_reference_lines, scan_citations

THESIS = """Introduction
Prior work (Smith, 2020) and (Garcia, Lee, 2019, p. 4) shaped this field [3].
Later studies [4-6] disagree.

References
Smith, J. et al. (2020). Learning from drafts. Journal of Writing, 4(2).
short line
Garcia, M., Lee, K. (2019). Revision habits of graduate students. Press.
"""


class TestScanCitations:
    def test_finds_both_citation_styles(self) -> None:
        scan = scan_citations(THESIS)

        assert scan.author_year == ["(Smith, 2020)", "(Garcia, Lee, 2019, p. 4)"]
        assert scan.numeric == ["[3]", "[4-6]"]
        assert scan.citation_count == 4
        assert scan.has_reference_section is True

    def test_plain_text_has_nothing(self) -> None:
        scan = scan_citations("A draft without any sources.")

        assert scan.citation_count == 0
        assert scan.has_reference_section is False
        assert scan.reference_lines == []


class TestExtractReferenceLines:
    def test_keeps_long_lines_after_heading(self) -> None:
        lines = extract_reference_lines(THESIS)

        assert lines == [
            "Smith, J. et al. (2020). Learning from drafts. Journal of Writing, 4(2).",
            "Garcia, M., Lee, K. (2019). Revision habits of graduate students. Press.",
        ]

    def test_caps_number_of_lines(self) -> None:
        entries = "\n".join(
            f"Author {n}, A. (2001). Some long title number {n}." for n in range(80)
        )

        assert len(extract_reference_lines("Bibliography\n" + entries)) == 50

    def test_heading_without_newline_is_ignored(self) -> None:
        assert extract_reference_lines("See the references listed below.") == []
