"""Unit tests for interactive selection collection (expressgen.prompts)."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from expressgen.config import Language
from expressgen.errors import ValidationError
from expressgen.prompts import collect_selection, default_answers

pytestmark = pytest.mark.unit


class TestCollectSelection:
    def test_javascript_skips_tsconfig_question(self):
        with patch("expressgen.prompts.Prompt.ask", side_effect=["my-api", "JavaScript"]), \
             patch("expressgen.prompts.Confirm.ask", side_effect=[True, True, False, True, False, False]) as confirm:
            sel = collect_selection()
        assert confirm.call_count == 6
        assert sel.project_name == "my-api"
        assert sel.language is Language.JAVASCRIPT
        assert sel.env_file and sel.enable_cors and sel.gitignore
        assert not (sel.database or sel.nodemon or sel.dockerfile or sel.ts_config)

    def test_typescript_asks_tsconfig_last(self):
        answers = [False, False, True, False, True, True, True]
        with patch("expressgen.prompts.Prompt.ask", side_effect=["TypeScript"]), \
             patch("expressgen.prompts.Confirm.ask", side_effect=answers) as confirm:
            sel = collect_selection(project_name="svc")
        assert confirm.call_count == 7
        assert "tsconfig" in confirm.call_args_list[-1].args[0]
        assert sel.language is Language.TYPESCRIPT
        assert sel.database and sel.nodemon and sel.dockerfile and sel.ts_config
        assert not sel.env_file

    def test_name_argument_skips_name_question(self):
        with patch("expressgen.prompts.Prompt.ask", side_effect=["JavaScript"]) as prompt, \
             patch("expressgen.prompts.Confirm.ask", return_value=False):
            sel = collect_selection(project_name=".")
        assert prompt.call_count == 1
        assert sel.uses_current_dir

    def test_empty_name_raises_validation_error(self):
        with patch("expressgen.prompts.Prompt.ask", side_effect=["JavaScript"]), \
             patch("expressgen.prompts.Confirm.ask", return_value=False):
            with pytest.raises(ValidationError):
                collect_selection(project_name="")


class TestDefaultAnswers:
    def test_match_prompt_defaults(self):
        answers = default_answers()
        assert answers["project_name"] == "."
        assert answers["language"] == "TypeScript"
        assert answers["env_file"] is True
        assert answers["enable_cors"] is True
        assert answers["database"] is False
        assert answers["gitignore"] is True
        assert answers["nodemon"] is False
        assert answers["dockerfile"] is False
        assert answers["ts_config"] is False

    def test_project_name_passed_through(self):
        assert default_answers("billing")["project_name"] == "billing"
