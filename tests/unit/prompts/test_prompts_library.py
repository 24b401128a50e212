from pathlib import Path
from typing import get_type_hints

import pytest
from pydantic import ValidationError

from revision_kit.llms.base import Role
from revision_kit.prompts.prompt import Prompt
from revision_kit.prompts.prompts_library import PromptsLibrary


@pytest.fixture
def prompts_dir(tmp_path: Path) -> Path:
    """Create a temp directory with sample YAML prompt files."""
    (tmp_path / "feedback.yaml").write_text(
        """name: feedback
version: "1.0"
description: Short feedback on a chapter
inputs:
  chapter: Chapter title
template: Give feedback on {{ chapter }}.
""",
        encoding="utf-8",
    )

    # Same name, newer version
    (tmp_path / "feedback_v2.yaml").write_text(
        """name: feedback
version: "2.0"
description: Feedback with a focus area
inputs:
  chapter: Chapter title
  focus: What to concentrate on
system: You are a thesis supervisor.
template: Give feedback on {{ chapter }}, focusing on {{focus}}.
""",
        encoding="utf-8",
    )

    return tmp_path


class TestPromptsLibrary:
    def test_loads_prompts_from_directory(self, prompts_dir: Path) -> None:
        library = PromptsLibrary(str(prompts_dir))

        assert len(library.list()) == 2

    def test_get_prompt_by_name_and_version(self, prompts_dir: Path) -> None:
        library = PromptsLibrary(prompts_dir)

        prompt = library.get("feedback", "2.0")

        assert isinstance(prompt, Prompt)
        assert prompt.system == "You are a thesis supervisor."
        assert set(prompt.inputs) == {"chapter", "focus"}

    def test_get_raises_keyerror_for_unknown_prompt(self, prompts_dir: Path) -> None:
        library = PromptsLibrary(prompts_dir)

        with pytest.raises(KeyError, match="Prompt 'unknown' version '1.0' not found"):
            library.get("unknown", "1.0")

    def test_empty_directory_loads_no_prompts(self, tmp_path: Path) -> None:
        assert PromptsLibrary(tmp_path).list() == []

    def test_unknown_field_rejected(self, tmp_path: Path) -> None:
        """Prompt files are strict: unexpected keys fail loading."""
        (tmp_path / "bad.yaml").write_text(
            'name: bad\nversion: "1.0"\ndescription: d\ninputs: {}\n'
            "template: t\ntemperature: 0.3\n",
            encoding="utf-8",
        )

        with pytest.raises(ValidationError):
            PromptsLibrary(tmp_path)

    def test_builtin_templates_load(self) -> None:
        library = PromptsLibrary()

        assert ("thesis_analysis", "1.0") in library.list()
        assert ("json_repair", "1.0") in library.list()
        assert ("citation_format", "1.0") in library.list()

    def test_messages_with_system(self, prompts_dir: Path) -> None:
        messages = PromptsLibrary(prompts_dir).messages(
            "feedback", "2.0", chapter="Methods", focus="sampling"
        )

        assert [m.role for m in messages] == [Role.SYSTEM, Role.USER]
        assert messages[0].content == "You are a thesis supervisor."
        assert messages[1].content == "Give feedback on Methods, focusing on sampling."

    def test_messages_without_system(self, prompts_dir: Path) -> None:
        """Templates with no system text render to a single user message."""
        messages = PromptsLibrary(prompts_dir).messages(
            "feedback", "1.0", chapter="Results"
        )

        assert len(messages) == 1
        assert messages[0].role == Role.USER


class TestPromptRender:
    def test_render_fills_placeholders(self, prompts_dir: Path) -> None:
        prompt = PromptsLibrary(prompts_dir).get("feedback", "2.0")

        rendered = prompt.render(chapter="Methods", focus="sampling")

        assert rendered == "Give feedback on Methods, focusing on sampling."

    def test_render_missing_input_raises(self, prompts_dir: Path) -> None:
        prompt = PromptsLibrary(prompts_dir).get("feedback", "2.0")

        with pytest.raises(ValueError, match="missing inputs: focus"):
            prompt.render(chapter="Methods")

    def test_render_undeclared_placeholder_raises(self) -> None:
        prompt = Prompt(
            name="p",
            version="1.0",
            description="d",
            inputs={},
            template="Hello {{ who }}",
        )

        with pytest.raises(ValueError, match="undeclared placeholder: who"):
            prompt.render()

    def test_json_braces_left_alone(self) -> None:
        """Single braces in JSON examples are not placeholders."""
        prompt = PromptsLibrary().get("thesis_analysis", "1.0")

        rendered = prompt.render(
            abstract="Not provided",
            current_context="ctx",
            current_metadata="total_chunks=1, selected_chunks=1",
            previous_section="",
        )

        assert '"progress_score"' in rendered
        assert "{{" not in rendered


def test_messages_annotation_resolves_builtin_list() -> None:
    """The ``list`` method must not leak into the type hints of its siblings."""
    import revision_kit
    from revision_kit.llms.base import Message

    hints = get_type_hints(revision_kit.PromptsLibrary.messages)

    assert hints["return"] == list[Message]
