"""Tests for interactive prompts."""

from unittest.mock import patch

import click
import pytest
from click.testing import CliRunner

from fabr.config import Placeholder
from fabr.prompts import (
    ProjectDetails,
    collect_placeholder_values,
    prompt_for_project_details,
    validate_project_name,
)


class TestValidateProjectName:
    """Tests for validate_project_name."""

    def test_strips_whitespace(self) -> None:
        assert validate_project_name("  my-app ") == "my-app"

    @pytest.mark.parametrize("name", ["", "   ", ".", "..", "a/b", "a\\b"])
    def test_rejects_unusable_names(self, name: str) -> None:
        with pytest.raises(click.BadParameter):
            validate_project_name(name)


class TestPromptForProjectDetails:
    """Tests for prompt_for_project_details."""

    def test_options_skip_prompts(self, registry) -> None:
        with patch("fabr.prompts.click.prompt") as prompt:
            details = prompt_for_project_details(registry, "other", "my-app")

        assert details == ProjectDetails(template="other", project_name="my-app")
        prompt.assert_not_called()

    def test_template_by_number(self, registry) -> None:
        with CliRunner().isolation(input="2\nmy-app\n"):
            details = prompt_for_project_details(registry)

        assert details == ProjectDetails(template="other", project_name="my-app")

    def test_template_by_slug(self, registry) -> None:
        with CliRunner().isolation(input="demo\nsite\n"):
            details = prompt_for_project_details(registry)

        assert details.template == "demo"

    def test_defaults(self, registry) -> None:
        with CliRunner().isolation(input="\n\n"):
            details = prompt_for_project_details(registry)

        assert details == ProjectDetails(template="demo", project_name="my-app")

    def test_invalid_answers_are_asked_again(self, registry) -> None:
        with CliRunner().isolation(input="7\nnope\n1\n../x\nok\n"):
            details = prompt_for_project_details(registry)

        assert details == ProjectDetails(template="demo", project_name="ok")

    def test_end_of_input_aborts(self, registry) -> None:
        with CliRunner().isolation(input=""), pytest.raises(click.Abort):
            prompt_for_project_details(registry)

    def test_invalid_name_option_raises(self, registry) -> None:
        with pytest.raises(click.BadParameter):
            prompt_for_project_details(registry, "demo", "a/b")


class TestCollectPlaceholderValues:
    """Tests for collect_placeholder_values."""

    def test_no_placeholders_asks_nothing(self) -> None:
        with patch("fabr.prompts.click.prompt") as prompt:
            assert collect_placeholder_values(()) == {}
        prompt.assert_not_called()

    def test_values_in_declared_order(self) -> None:
        placeholders = (
            Placeholder(key="APP_NAME", prompt="App name?"),
            Placeholder(key="AUTHOR", prompt="Author?"),
        )
        with patch("fabr.prompts.click.prompt", side_effect=["Demo", "Ada"]) as prompt:
            values = collect_placeholder_values(placeholders)

        assert list(values.items()) == [("APP_NAME", "Demo"), ("AUTHOR", "Ada")]
        assert [c.args[0] for c in prompt.call_args_list] == ["App name?", "Author?"]

    def test_abort_propagates(self) -> None:
        placeholders = (Placeholder(key="APP_NAME", prompt="App name?"),)
        with (
            patch("fabr.prompts.click.prompt", side_effect=click.Abort()),
            pytest.raises(click.Abort),
        ):
            collect_placeholder_values(placeholders)

    def test_empty_answer_is_accepted(self) -> None:
        placeholders = (
            Placeholder(key="DESCRIPTION", prompt="Description?"),
            Placeholder(key="AUTHOR", prompt="Author?"),
        )
        with CliRunner().isolation(input="\nAda\n"):
            values = collect_placeholder_values(placeholders)

        assert values == {"DESCRIPTION": "", "AUTHOR": "Ada"}
