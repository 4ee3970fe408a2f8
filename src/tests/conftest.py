# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

import pytest


class ScriptedPrompter:
    """Feeds canned answers to the selector and records everything it prints."""

    def __init__(self, answers: list[str], confirms: list[bool] | None = None):
        self.answers = list(answers)
        self.confirms = list(confirms or [])
        self.prompts: list[str] = []
        self.said: list[str] = []

    def ask(self, prompt: str) -> str | None:
        self.prompts.append(prompt)
        if not self.answers:
            return None
        return self.answers.pop(0)

    def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        if not self.confirms:
            return False
        return self.confirms.pop(0)

    def say(self, text: str = "") -> None:
        self.said.append(text)

    @property
    def output(self) -> str:
        return "\n".join(self.said)


@pytest.fixture
def scripted_prompter():
    def _make(answers: list[str], confirms: list[bool] | None = None):
        return ScriptedPrompter(answers, confirms)

    return _make
