# Copyright 2020 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from smufl_glyphs import prompt
from smufl_glyphs.prompt import ConsolePrompter, ScriptedPrompter
import pytest


class FakeInput:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.asked = []

    def __call__(self, message):
        self.asked.append(message)
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


def _console(*responses, interactive=True):
    fake_input = FakeInput(*responses)
    return ConsolePrompter(fake_input, lambda: interactive), fake_input


@pytest.mark.parametrize(
    "response, expected",
    [
        ("y", True),
        ("Y", True),
        ("yes", True),
        (" yes ", True),
        ("n", False),
        ("", False),
        ("sure", False),
    ],
)
def test_parse_answer(response, expected):
    assert prompt._parse_answer(response) == expected


def test_confirm_all_asks_every_question():
    console, fake_input = _console("y", "n")
    answers = console.confirm_all([("a", "Overwrite a?"), ("b", "Overwrite b?")])
    assert answers == {"a": True, "b": False}
    assert fake_input.asked == ["Overwrite a? [y/N] ", "Overwrite b? [y/N] "]


def test_confirm():
    console, _ = _console("yes")
    assert console.confirm("Continue?")


def test_not_interactive_declines_everything():
    console, fake_input = _console(interactive=False)
    answers = console.confirm_all([("a", "Overwrite a?"), ("b", "Overwrite b?")])
    assert answers == {"a": False, "b": False}
    assert fake_input.asked == []


@pytest.mark.parametrize("cancel", [EOFError(), KeyboardInterrupt()])
def test_cancelled_declines_the_whole_batch(cancel):
    console, fake_input = _console("y", cancel)
    answers = console.confirm_all(
        [("a", "Overwrite a?"), ("b", "Overwrite b?"), ("c", "Overwrite c?")]
    )
    # the "y" given before cancelling doesn't count either
    assert answers == {"a": False, "b": False, "c": False}
    assert len(fake_input.asked) == 2


def test_no_questions():
    console, fake_input = _console()
    assert console.confirm_all([]) == {}
    assert fake_input.asked == []


def test_scripted_prompter_records_batches():
    scripted = ScriptedPrompter({"a": True})
    assert scripted.confirm_all([("a", "A?"), ("b", "B?")]) == {"a": True, "b": False}
    assert scripted.confirm("Go?") is False
    assert scripted.batches == [(("a", "A?"), ("b", "B?")), ((None, "Go?"),)]
    assert len(scripted.questions) == 3


def test_confirm_missing_answer_is_no():
    class Forgetful(ScriptedPrompter):
        def confirm_all(self, questions):
            super().confirm_all(questions)
            return {}

    assert Forgetful(default=True).confirm("Continue?") is False


def test_confirm_cancelled():
    console, _ = _console(KeyboardInterrupt())
    assert console.confirm("Continue?") is False
